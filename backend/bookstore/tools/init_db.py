"""
CLI to prepare the bookstore database.

- Creates all tables and the USER/ADMIN roles.
- Optionally runs SQL seed scripts (in the order given).
- Optionally creates an administrator account.

Usage examples:
  python -m bookstore.tools.init_db
  python -m bookstore.tools.init_db --sql seed/categories.sql --sql seed/books.sql
  python -m bookstore.tools.init_db --admin-email admin@admin.com --admin-password 'change-me-now'
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from bookstore.core.logging import init_logging
from bookstore.db.init_db import ensure_admin, init_db
from bookstore.db.scripts import execute_sql_script
from bookstore.db.session import DATABASE_URL, engine


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create bookstore tables, default roles and optional seed data.")
    parser.add_argument(
        "--sql",
        action="append",
        default=[],
        metavar="PATH",
        help="SQL script to execute after table creation (repeatable).",
    )
    parser.add_argument("--admin-email", help="E-mail of an administrator account to create.")
    parser.add_argument("--admin-password", help="Password for the administrator account.")
    args = parser.parse_args(argv)
    if bool(args.admin_email) != bool(args.admin_password):
        parser.error("--admin-email and --admin-password must be given together")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entrypoint for the CLI.

    Returns:
        Process exit code (0 for success, non-zero for error).
    """
    args = _parse_args(argv)
    init_logging(stream=sys.stderr)
    try:
        init_db(engine)
        statements = sum(execute_sql_script(engine, path) for path in args.sql)
        admin_id = None
        if args.admin_email:
            admin_id = ensure_admin(args.admin_email, args.admin_password, engine=engine).id
    except (OSError, SQLAlchemyError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    result = {"database": DATABASE_URL, "sql_statements": statements, "admin_id": admin_id}
    print(json.dumps(result, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
