"""
Pytest configuration for backend tests.

Points the application at an isolated SQLite database file (rather than
in-memory) so the API, repositories and SQL fixture scripts share one database
across connections.

Fixtures:
- db_engine (session scope): Creates the tables and tears them down.
- db_session (function scope): Clean Session per test (all tables truncated first).
- run_sql: Executes SQL fixture scripts from tests/database/.
- seeded_users: Roles, an admin (admin@admin.com) and a customer (user1@email.com).
- client: TestClient over the full application.
- admin_token / user_token: Bearer tokens for the seeded accounts.
"""

from __future__ import annotations

import os
import shutil
import sys
import tempfile
from pathlib import Path
from typing import Callable, Dict, Generator

import pytest

# Ensure the 'backend' directory is on sys.path so we can import bookstore when running tests from repo root
CURRENT_DIR = Path(__file__).parent
BACKEND_ROOT = (CURRENT_DIR / "..").resolve()
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

# The engine is built when bookstore.db.session is first imported, so the
# database URL has to be in place before any test module imports bookstore.
_TMP_DIR = Path(tempfile.mkdtemp(prefix="bookstore-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{(_TMP_DIR / 'test.db').as_posix()}"
os.environ["APP_ENV"] = "test"
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("SQLALCHEMY_ECHO", "0")

SQL_DIR = CURRENT_DIR / "database"

ADMIN_EMAIL = "admin@admin.com"
USER_EMAIL = "user1@email.com"


@pytest.fixture(scope="session")
def db_engine() -> Generator:
    """
    Create all tables on the temporary SQLite database for the whole session.
    """
    from bookstore.db.base import Base, import_all_models
    from bookstore.db.session import engine

    import_all_models()
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()
        shutil.rmtree(_TMP_DIR, ignore_errors=True)


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator:
    """
    Provide a fresh Session for each test function.
    Truncates all tables before the test runs.
    """
    from bookstore.db.base import Base
    from bookstore.db.session import SessionLocal

    with db_engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())

    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def run_sql(db_engine, db_session) -> Callable[[str], int]:
    """
    Execute a fixture script by path relative to tests/database, e.g. "category/add-categories.sql".
    """
    from bookstore.db.scripts import execute_sql_script

    def _run(relative_path: str) -> int:
        return execute_sql_script(db_engine, SQL_DIR / relative_path)

    return _run


@pytest.fixture
def seeded_users(run_sql) -> Dict[str, int]:
    run_sql("user/add-users.sql")
    return {ADMIN_EMAIL: 1, USER_EMAIL: 2}


@pytest.fixture
def client(db_session):
    from fastapi.testclient import TestClient

    from bookstore.main import get_application

    return TestClient(get_application())


@pytest.fixture
def admin_token(seeded_users) -> str:
    from bookstore.core.security import get_jwt_util

    return get_jwt_util().generate_token(ADMIN_EMAIL)


@pytest.fixture
def user_token(seeded_users) -> str:
    from bookstore.core.security import get_jwt_util

    return get_jwt_util().generate_token(USER_EMAIL)
