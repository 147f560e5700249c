"""Services Layer — business rules for the user resource."""
