"""
SQLAlchemy-based ShoppingCart repository.

Covers the cart itself and its items. Item lookups are always scoped to a cart
so one user can never reach another user's items.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookstore.models.shopping_cart import CartItem, ShoppingCart

__all__ = ["SqlAlchemyShoppingCartRepo"]


class SqlAlchemyShoppingCartRepo:
    def __init__(self, session: Session) -> None:
        if not isinstance(session, Session):
            raise TypeError("session must be an instance of sqlalchemy.orm.Session")
        self.session = session

    # -------------------------------
    # Carts
    # -------------------------------

    def get_by_user_id(self, user_id: int) -> Optional[ShoppingCart]:
        stmt = select(ShoppingCart).where(ShoppingCart.user_id == int(user_id))
        return self.session.execute(stmt).scalars().first()

    def create_for_user(self, user_id: int) -> ShoppingCart:
        cart = ShoppingCart(user_id=int(user_id))
        self.session.add(cart)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError("User already has a shopping cart") from exc
        self.session.refresh(cart)
        return cart

    # -------------------------------
    # Items
    # -------------------------------

    def get_item(self, cart_id: int, item_id: int) -> Optional[CartItem]:
        stmt = select(CartItem).where(
            CartItem.id == int(item_id),
            CartItem.shopping_cart_id == int(cart_id),
        )
        return self.session.execute(stmt).scalars().first()

    def find_item_by_book(self, cart_id: int, book_id: int) -> Optional[CartItem]:
        stmt = select(CartItem).where(
            CartItem.shopping_cart_id == int(cart_id),
            CartItem.book_id == int(book_id),
        )
        return self.session.execute(stmt).scalars().first()

    def add_item(self, cart_id: int, book_id: int, quantity: int) -> CartItem:
        if int(quantity) < 1:
            raise ValueError("quantity must be positive")
        item = CartItem(shopping_cart_id=int(cart_id), book_id=int(book_id), quantity=int(quantity))
        self.session.add(item)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError("Book is already in the cart") from exc
        self.session.refresh(item)
        self._expire_cart(cart_id)
        return item

    def update_item_quantity(self, item: CartItem, quantity: int) -> CartItem:
        if int(quantity) < 1:
            raise ValueError("quantity must be positive")
        item.quantity = int(quantity)
        self.session.commit()
        self.session.refresh(item)
        return item

    def delete_item(self, item: CartItem) -> None:
        cart_id = item.shopping_cart_id
        self.session.delete(item)
        self.session.commit()
        self._expire_cart(cart_id)

    def _expire_cart(self, cart_id: int) -> None:
        # Reload cart_items on next access; sessions do not expire on commit
        cart = self.session.get(ShoppingCart, int(cart_id))
        if cart is not None:
            self.session.expire(cart, ["cart_items"])
