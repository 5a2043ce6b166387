"""
API layer for the users service.

Exposes the /ping liveness probe and the /users CRUD endpoints.
"""
