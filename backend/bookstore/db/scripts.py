"""
Run plain SQL scripts (fixtures, seed data) against an engine.

Statements are separated by ';'. Full-line '--' comments are dropped. Each
script runs inside a single transaction, so a failing statement rolls back the
whole file.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Union

from sqlalchemy.engine import Engine

from bookstore.core.logging import get_logger

__all__ = ["split_sql_statements", "execute_sql_script"]

log = get_logger(__name__)


def split_sql_statements(sql: str) -> List[str]:
    """Split a script into individual statements, skipping comments and blanks."""
    lines = [ln for ln in sql.splitlines() if not ln.strip().startswith("--")]
    return [stmt.strip() for stmt in "\n".join(lines).split(";") if stmt.strip()]


def execute_sql_script(engine: Engine, path: Union[str, Path]) -> int:
    """
    Execute every statement of the script at `path`.

    Returns:
        The number of statements executed.
    """
    script = Path(path)
    statements = split_sql_statements(script.read_text(encoding="utf-8"))
    with engine.begin() as conn:
        for stmt in statements:
            conn.exec_driver_sql(stmt)
    log.debug("sql_script_executed", extra={"script": script.name, "statements": len(statements)})
    return len(statements)
