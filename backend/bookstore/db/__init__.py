"""Database layer: declarative base, engine/session wiring and SQL script helpers."""
