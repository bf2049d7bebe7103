"""
Database initialization.

- init_db(): create all tables and make sure every RoleName has a row.
- ensure_admin(): create (or promote) an administrator account.

Production deployments are expected to manage schema changes with a migration
tool; create_all only adds missing tables.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.engine import Engine

from bookstore.core.logging import get_logger
from bookstore.core.security import hash_password
from bookstore.db.base import Base, import_all_models
from bookstore.db.session import engine as default_engine, session_factory
from bookstore.models.role import Role, RoleName
from bookstore.models.user import User
from bookstore.repos.role_repo import SqlAlchemyRoleRepo
from bookstore.repos.shopping_cart_repo import SqlAlchemyShoppingCartRepo
from bookstore.repos.user_repo import SqlAlchemyUserRepo

__all__ = ["init_db", "ensure_roles", "ensure_admin"]

log = get_logger(__name__)


def ensure_roles(engine: Optional[Engine] = None) -> List[Role]:
    """Insert any missing RoleName rows and return all roles."""
    with session_factory(engine)() as session:
        repo = SqlAlchemyRoleRepo(session)
        roles: List[Role] = []
        for name in RoleName:
            role = repo.find_by_name(name)
            if role is None:
                role = repo.create(name)
                log.info("role_created", extra={"role": name.value})
            roles.append(role)
        return roles


def init_db(engine: Optional[Engine] = None) -> None:
    """Create all database tables and default roles."""
    bind = engine if engine is not None else default_engine
    import_all_models()
    Base.metadata.create_all(bind=bind)
    ensure_roles(bind)


def ensure_admin(
    email: str,
    password: str,
    *,
    first_name: str = "Admin",
    last_name: str = "Admin",
    engine: Optional[Engine] = None,
) -> User:
    """
    Create an administrator with both USER and ADMIN roles, or grant ADMIN to an existing user.
    """
    roles = ensure_roles(engine)
    with session_factory(engine)() as session:
        users = SqlAlchemyUserRepo(session)
        carts = SqlAlchemyShoppingCartRepo(session)
        user = users.get_by_email(email)
        if user is None:
            user = users.create(
                User(
                    email=email,
                    password=hash_password(password),
                    first_name=first_name,
                    last_name=last_name,
                    roles=[session.merge(r) for r in roles],
                )
            )
            log.info("admin_created", extra={"user_id": user.id})
        elif RoleName.ADMIN not in user.role_names:
            user.roles.append(session.merge(next(r for r in roles if r.name is RoleName.ADMIN)))
            session.commit()
            log.info("admin_granted", extra={"user_id": user.id})
        if carts.get_by_user_id(user.id) is None:
            carts.create_for_user(user.id)
        return user
