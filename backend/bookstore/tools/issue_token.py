"""
CLI to print a bearer token for an existing user.

Handy for calling protected endpoints with curl during development:
  curl -H "Authorization: Bearer $(python -m bookstore.tools.issue_token admin@admin.com)" \
       http://localhost:8000/categories
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from bookstore.core.security import get_jwt_util
from bookstore.db.session import SessionLocal
from bookstore.repos.user_repo import SqlAlchemyUserRepo


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print a signed bearer token for a user e-mail.")
    parser.add_argument("email", help="E-mail of an existing user.")
    parser.add_argument(
        "--skip-lookup",
        action="store_true",
        help="Do not check that the user exists in the database.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    if not args.skip_lookup:
        with SessionLocal() as session:
            if SqlAlchemyUserRepo(session).get_by_email(args.email) is None:
                print(f"Error: no user with email {args.email}", file=sys.stderr)
                return 1
    print(get_jwt_util().generate_token(args.email.strip().lower()))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
