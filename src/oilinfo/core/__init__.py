"""Core application infrastructure: config, errors, lifecycle, middleware."""
