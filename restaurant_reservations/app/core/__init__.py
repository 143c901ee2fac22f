"""Core utilities: configuration, logging, errors, storage and codec."""
