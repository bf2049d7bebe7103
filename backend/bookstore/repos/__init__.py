"""SQLAlchemy implementations of the repository contracts in bookstore.core.contracts."""
