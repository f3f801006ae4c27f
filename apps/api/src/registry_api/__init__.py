"""User Registry API: FastAPI host for the user registry."""
