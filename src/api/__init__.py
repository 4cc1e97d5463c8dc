"""Public API: GenerationService facade and result models."""
