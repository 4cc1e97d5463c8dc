"""Fixed-window request rate limiting with pluggable stores."""
