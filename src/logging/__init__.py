"""Structured logging setup and request context."""
