"""Infrastructure — database sessions, logging, persistence gateway."""
