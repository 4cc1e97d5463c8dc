"""Text-generation providers and the resilience primitives guarding them."""
