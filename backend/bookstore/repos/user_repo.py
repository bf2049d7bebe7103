"""
SQLAlchemy-based User repository.

E-mail lookups are case-insensitive; e-mails are stored lowercased.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookstore.models.user import User

__all__ = ["SqlAlchemyUserRepo"]


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class SqlAlchemyUserRepo:
    def __init__(self, session: Session) -> None:
        if not isinstance(session, Session):
            raise TypeError("session must be an instance of sqlalchemy.orm.Session")
        self.session = session

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.session.get(User, int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        if not isinstance(email, str) or not email.strip():
            return None
        stmt = select(User).where(User.email == _normalize_email(email))
        return self.session.execute(stmt).scalars().first()

    def exists_by_email(self, email: str) -> bool:
        if not isinstance(email, str) or not email.strip():
            return False
        stmt = select(exists().where(User.email == _normalize_email(email)))
        return bool(self.session.execute(stmt).scalar())

    def create(self, user: User) -> User:
        user.email = _normalize_email(user.email)
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError("User creation failed due to uniqueness constraint") from exc
        self.session.refresh(user)
        return user
