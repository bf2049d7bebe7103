"""ORM models. Submodules are imported by bookstore.db.base.import_all_models()."""
