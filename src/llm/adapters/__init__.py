"""Provider adapters implementing BaseTextProvider."""
