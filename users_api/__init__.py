"""
Users API root package.

This package contains the FastAPI app entry point (main.py), API routes,
the user service and validation rules, the domain model, and the
infrastructure adapters for MongoDB and Vault.
"""
