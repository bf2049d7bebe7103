"""
Repository contracts (Protocols) for data access layers.

These Protocols define the operations the services and routes rely on.
Concrete implementations live in bookstore.repos (SQLAlchemy); tests may
substitute in-memory fakes as long as they satisfy these interfaces.

Protocols:
- BookRepo
- CategoryRepo
- RoleRepo
- UserRepo
- ShoppingCartRepo
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional, Protocol, Sequence, runtime_checkable

from bookstore.core.pagination import PageRequest, PageResult

if TYPE_CHECKING:
    from bookstore.models.book import Book
    from bookstore.models.category import Category
    from bookstore.models.role import Role, RoleName
    from bookstore.models.shopping_cart import CartItem, ShoppingCart
    from bookstore.models.user import User
    from bookstore.schemas.book import BookSearchParameters

__all__ = ["BookRepo", "CategoryRepo", "RoleRepo", "UserRepo", "ShoppingCartRepo"]


# -------------------------------
# Book Repository
# -------------------------------

@runtime_checkable
class BookRepo(Protocol):
    """
    Contract for book data access.
    """

    def get_by_id(self, book_id: int) -> Optional["Book"]:
        raise NotImplementedError()

    def list(self, page_request: PageRequest) -> PageResult["Book"]:
        raise NotImplementedError()

    def exists_by_isbn(self, isbn: str) -> bool:
        """True when any book already uses `isbn`."""
        raise NotImplementedError()

    def find_by_category_id(self, category_id: int, page_request: PageRequest) -> PageResult["Book"]:
        """Page of books linked to the category."""
        raise NotImplementedError()

    def search(self, params: "BookSearchParameters", page_request: PageRequest) -> PageResult["Book"]:
        raise NotImplementedError()

    def create(self, book: "Book") -> "Book":
        raise NotImplementedError()

    def update(self, book: "Book") -> "Book":
        raise NotImplementedError()

    def delete(self, book: "Book") -> None:
        raise NotImplementedError()


# -------------------------------
# Category Repository
# -------------------------------

@runtime_checkable
class CategoryRepo(Protocol):
    """
    Contract for category data access.
    """

    def get_by_id(self, category_id: int) -> Optional["Category"]:
        raise NotImplementedError()

    def get_many(self, category_ids: Iterable[int]) -> Sequence["Category"]:
        """Return the categories that exist among `category_ids`."""
        raise NotImplementedError()

    def list(self, page_request: PageRequest) -> PageResult["Category"]:
        raise NotImplementedError()

    def exists_by_name(self, name: str) -> bool:
        raise NotImplementedError()

    def create(self, category: "Category") -> "Category":
        raise NotImplementedError()

    def update(self, category: "Category") -> "Category":
        raise NotImplementedError()

    def delete(self, category: "Category") -> None:
        raise NotImplementedError()


# -------------------------------
# Role / User Repositories
# -------------------------------

@runtime_checkable
class RoleRepo(Protocol):
    """
    Contract for role lookups.
    """

    def find_by_name(self, name: "RoleName") -> Optional["Role"]:
        raise NotImplementedError()

    def create(self, name: "RoleName") -> "Role":
        raise NotImplementedError()


@runtime_checkable
class UserRepo(Protocol):
    """
    Contract for user accounts.
    """

    def get_by_id(self, user_id: int) -> Optional["User"]:
        raise NotImplementedError()

    def get_by_email(self, email: str) -> Optional["User"]:
        raise NotImplementedError()

    def exists_by_email(self, email: str) -> bool:
        raise NotImplementedError()

    def create(self, user: "User") -> "User":
        raise NotImplementedError()


# -------------------------------
# Shopping Cart Repository
# -------------------------------

@runtime_checkable
class ShoppingCartRepo(Protocol):
    """
    Contract for shopping carts and their items.
    """

    def get_by_user_id(self, user_id: int) -> Optional["ShoppingCart"]:
        raise NotImplementedError()

    def create_for_user(self, user_id: int) -> "ShoppingCart":
        raise NotImplementedError()

    def get_item(self, cart_id: int, item_id: int) -> Optional["CartItem"]:
        """Item `item_id` only if it belongs to cart `cart_id`."""
        raise NotImplementedError()

    def find_item_by_book(self, cart_id: int, book_id: int) -> Optional["CartItem"]:
        raise NotImplementedError()

    def add_item(self, cart_id: int, book_id: int, quantity: int) -> "CartItem":
        raise NotImplementedError()

    def update_item_quantity(self, item: "CartItem", quantity: int) -> "CartItem":
        raise NotImplementedError()

    def delete_item(self, item: "CartItem") -> None:
        raise NotImplementedError()
