"""Core infrastructure: run settings and logging."""
