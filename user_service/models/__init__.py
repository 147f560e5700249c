"""ORM Models — SQLAlchemy table mappings."""
