"""Core Layer — domain types, error taxonomy, pure input checks. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
"""
