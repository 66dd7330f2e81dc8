"""Core infrastructure: configuration, logging, errors, concurrency."""
