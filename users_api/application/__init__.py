"""Application layer: DTOs and the user service."""
