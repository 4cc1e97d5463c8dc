"""Key/value result caching with TTL and durable fallback slots."""
