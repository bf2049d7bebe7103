"""
Role model.

A named authority granted to users. Names are a closed set (RoleName).
"""

from __future__ import annotations

import enum

from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from bookstore.db.base import Base


class RoleName(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class Role(Base):
    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # Stored as the enum name ("USER", "ADMIN"), unique
    name: Mapped[RoleName] = mapped_column(
        SAEnum(RoleName, native_enum=False, length=20, validate_strings=True),
        nullable=False,
        unique=True,
    )

    def __repr__(self) -> str:
        return f"<Role id={self.id!r} name={self.name!r}>"
