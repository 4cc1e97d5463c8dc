"""Core domain models and the shared error taxonomy."""
