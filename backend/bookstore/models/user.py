"""
User model.

A registered customer or administrator. Users authenticate with e-mail and
password and hold one or more roles through the users_roles association table.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Set

from sqlalchemy import Column, ForeignKey, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookstore.db.base import Base

if TYPE_CHECKING:
    from bookstore.models.role import Role, RoleName
    from bookstore.models.shopping_cart import ShoppingCart


users_roles = Table(
    "users_roles",
    Base.metadata,
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # Login identifier (unique)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)

    # Password hash, never the plaintext
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    shipping_address: Mapped[str | None] = mapped_column(String(512), nullable=True)

    roles: Mapped[List["Role"]] = relationship(
        "Role",
        secondary=users_roles,
        lazy="selectin",
        passive_deletes=True,
    )
    shopping_cart: Mapped[Optional["ShoppingCart"]] = relationship(
        "ShoppingCart",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def role_names(self) -> Set["RoleName"]:
        return {role.name for role in self.roles}

    def __repr__(self) -> str:
        return f"<User id={self.id!r} email={self.email!r}>"
