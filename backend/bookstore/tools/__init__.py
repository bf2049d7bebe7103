"""Command-line utilities (python -m bookstore.tools.<name>)."""
