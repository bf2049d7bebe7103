"""
SQLAlchemy-based Role repository.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookstore.models.role import Role, RoleName

__all__ = ["SqlAlchemyRoleRepo"]


class SqlAlchemyRoleRepo:
    def __init__(self, session: Session) -> None:
        if not isinstance(session, Session):
            raise TypeError("session must be an instance of sqlalchemy.orm.Session")
        self.session = session

    def find_by_name(self, name: RoleName) -> Optional[Role]:
        stmt = select(Role).where(Role.name == RoleName(name))
        return self.session.execute(stmt).scalars().first()

    def create(self, name: RoleName) -> Role:
        role = Role(name=RoleName(name))
        self.session.add(role)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError(f"Role {RoleName(name).value} already exists") from exc
        self.session.refresh(role)
        return role
