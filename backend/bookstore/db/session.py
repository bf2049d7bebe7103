"""
Database engine and request-scoped sessions.

- build_engine(url): engine for any URL; SQLite gets thread-sharing and FK enforcement.
- engine / SessionLocal: the application's default engine and session factory.
- session_factory(engine): a factory with the same session options bound elsewhere
  (init_db and the CLI tools accept an explicit engine).
- get_db(): FastAPI dependency yielding one session per request.

The URL comes from DATABASE_URL / DB_URL, else from settings.db_url.
"""

from __future__ import annotations

import os
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from bookstore.core.config import get_settings

__all__ = [
    "build_engine",
    "session_factory",
    "engine",
    "SessionLocal",
    "get_db",
    "DATABASE_URL",
    "SQLALCHEMY_ECHO",
]

DATABASE_URL: str = os.getenv("DATABASE_URL") or os.getenv("DB_URL") or get_settings().db_url

SQLALCHEMY_ECHO: bool = os.getenv("SQLALCHEMY_ECHO", "0").lower() in {"1", "true", "yes", "on"}


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:  # pragma: no cover
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


def build_engine(url: str, *, echo: bool = False) -> Engine:
    """
    Create an engine for `url`.

    SQLite connections are shared across the request threadpool and need
    foreign keys switched on per connection (cascades on books_categories,
    cart_items and users_roles depend on it). Other backends get pre-ping.
    """
    if url.startswith("sqlite"):
        sqlite_engine = create_engine(url, connect_args={"check_same_thread": False}, echo=echo)
        event.listen(sqlite_engine, "connect", _enable_sqlite_foreign_keys)
        return sqlite_engine
    return create_engine(url, pool_pre_ping=True, echo=echo)


def session_factory(bind: Optional[Engine] = None) -> sessionmaker:
    """
    Sessions do not expire on commit: services build DTOs from rows after the
    repository has committed.
    """
    return sessionmaker(
        bind=bind if bind is not None else engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        class_=Session,
    )


engine: Engine = build_engine(DATABASE_URL, echo=SQLALCHEMY_ECHO)

SessionLocal = session_factory(engine)


def get_db() -> Generator[Session, None, None]:
    """
    Yield a database session and ensure it's closed afterwards.

    Usage in FastAPI:
        db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
