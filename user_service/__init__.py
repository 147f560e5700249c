"""User Service Package — CRUD HTTP service over a single user resource.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
