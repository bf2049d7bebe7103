"""Bookstore backend package root."""

__all__ = [
    "api",
    "core",
    "db",
    "models",
    "repos",
    "schemas",
    "services",
    "tools",
]
