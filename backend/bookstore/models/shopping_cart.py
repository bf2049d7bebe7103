"""
ShoppingCart and CartItem models.

Every user owns exactly one cart (created at registration). A cart holds at
most one item per book; adding the same book again grows that item's quantity.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from sqlalchemy import CheckConstraint, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookstore.db.base import Base

if TYPE_CHECKING:
    from bookstore.models.book import Book
    from bookstore.models.user import User


class ShoppingCart(Base):
    __tablename__ = "shopping_carts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    user: Mapped["User"] = relationship("User", back_populates="shopping_cart")
    cart_items: Mapped[List["CartItem"]] = relationship(
        "CartItem",
        back_populates="shopping_cart",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="CartItem.id",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<ShoppingCart id={self.id!r} user_id={self.user_id!r}>"


class CartItem(Base):
    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("shopping_cart_id", "book_id", name="uq_cart_items_cart_book"),
        CheckConstraint("quantity >= 1", name="quantity_positive"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    shopping_cart_id: Mapped[int] = mapped_column(
        ForeignKey("shopping_carts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    book_id: Mapped[int] = mapped_column(
        ForeignKey("books.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    shopping_cart: Mapped["ShoppingCart"] = relationship("ShoppingCart", back_populates="cart_items")
    book: Mapped["Book"] = relationship("Book", lazy="joined")

    def __repr__(self) -> str:
        return f"<CartItem id={self.id!r} book_id={self.book_id!r} quantity={self.quantity!r}>"
