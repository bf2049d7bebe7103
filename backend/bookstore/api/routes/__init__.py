"""Collection of API route modules (auth, books, categories, cart)."""

__all__ = [
    "auth",
    "books",
    "categories",
    "cart",
]
