"""Domain layer: the User model, field names and the repository contract."""
