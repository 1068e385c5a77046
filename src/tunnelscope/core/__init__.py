"""Core services: configuration, errors, logging and metrics."""
