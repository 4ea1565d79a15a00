"""Shared utilities for backend services."""

__all__ = [
    "env",
    "config",
    "logging",
    "models",
    "cache",
    "dependencies",
]
