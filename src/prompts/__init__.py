"""Deterministic prompt templates for the six generation tasks."""
