"""Business services coordinating repositories (auth, books, categories, carts)."""
