"""Request-governance core: rate governor and input validation engine."""
