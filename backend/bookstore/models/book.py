"""
Book model.

A title in the catalog. ISBN is unique; categories are linked many-to-many.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, List

from sqlalchemy import CheckConstraint, Column, ForeignKey, Numeric, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookstore.db.base import Base

if TYPE_CHECKING:
    from bookstore.models.category import Category


books_categories = Table(
    "books_categories",
    Base.metadata,
    Column("book_id", ForeignKey("books.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class Book(Base):
    __tablename__ = "books"
    __table_args__ = (
        CheckConstraint("price >= 0", name="price_non_negative"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    author: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    isbn: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    cover_image: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    categories: Mapped[List["Category"]] = relationship(
        "Category",
        secondary=books_categories,
        lazy="selectin",
        passive_deletes=True,
    )

    @property
    def category_ids(self) -> List[int]:
        return sorted(c.id for c in self.categories)

    def __repr__(self) -> str:
        return f"<Book id={self.id!r} isbn={self.isbn!r} title={self.title!r}>"
