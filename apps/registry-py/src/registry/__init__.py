"""User registry core: models, validation, stores and request handlers."""
