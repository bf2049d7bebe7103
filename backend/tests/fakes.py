"""
In-memory fake repositories for testing services without a real database.

Implements Protocol-compatible classes:
- FakeBookRepo
- FakeCategoryRepo
- FakeRoleRepo
- FakeUserRepo
- FakeShoppingCartRepo

Entities are plain (transient) ORM instances that never touch a Session, so the
services and DTO conversions see the same attributes they would in production.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

from bookstore.core.pagination import PageRequest, PageResult
from bookstore.db.base import import_all_models
from bookstore.models.book import Book
from bookstore.models.category import Category
from bookstore.models.role import Role, RoleName
from bookstore.models.shopping_cart import CartItem, ShoppingCart
from bookstore.models.user import User

import_all_models()


def _page(rows: List, page_request: PageRequest) -> PageResult:
    start = page_request.offset
    return PageResult(
        content=rows[start:start + page_request.size],
        page=page_request.page,
        size=page_request.size,
        total_elements=len(rows),
    )


# ----------------------------------------
# Catalog
# ----------------------------------------

class FakeCategoryRepo:
    def __init__(self) -> None:
        self._rows: Dict[int, Category] = {}
        self._next_id = 1

    def add(self, name: str, description: Optional[str] = None) -> Category:
        return self.create(Category(name=name, description=description))

    def get_by_id(self, category_id: int) -> Optional[Category]:
        return self._rows.get(int(category_id))

    def get_many(self, category_ids: Iterable[int]) -> Sequence[Category]:
        return [self._rows[cid] for cid in sorted(set(category_ids)) if cid in self._rows]

    def list(self, page_request: PageRequest) -> PageResult[Category]:
        return _page([self._rows[k] for k in sorted(self._rows)], page_request)

    def exists_by_name(self, name: str) -> bool:
        return any(c.name.lower() == name.strip().lower() for c in self._rows.values())

    def create(self, category: Category) -> Category:
        category.id = self._next_id
        self._next_id += 1
        self._rows[category.id] = category
        return category

    def update(self, category: Category) -> Category:
        self._rows[category.id] = category
        return category

    def delete(self, category: Category) -> None:
        self._rows.pop(category.id, None)


class FakeBookRepo:
    def __init__(self) -> None:
        self._rows: Dict[int, Book] = {}
        self._next_id = 1

    def add(self, title: str, isbn: str, price: str = "10.00", categories: Sequence[Category] = ()) -> Book:
        return self.create(
            Book(title=title, author="Author", isbn=isbn, price=Decimal(price), categories=list(categories))
        )

    def get_by_id(self, book_id: int) -> Optional[Book]:
        return self._rows.get(int(book_id))

    def list(self, page_request: PageRequest) -> PageResult[Book]:
        return _page([self._rows[k] for k in sorted(self._rows)], page_request)

    def exists_by_isbn(self, isbn: str) -> bool:
        return any(b.isbn == isbn for b in self._rows.values())

    def find_by_category_id(self, category_id: int, page_request: PageRequest) -> PageResult[Book]:
        rows = [self._rows[k] for k in sorted(self._rows) if category_id in self._rows[k].category_ids]
        return _page(rows, page_request)

    def search(self, params, page_request: PageRequest) -> PageResult[Book]:
        rows = [self._rows[k] for k in sorted(self._rows)]
        if params.title:
            rows = [b for b in rows if params.title.lower() in b.title.lower()]
        if params.isbn:
            rows = [b for b in rows if b.isbn == params.isbn]
        return _page(rows, page_request)

    def create(self, book: Book) -> Book:
        if self.exists_by_isbn(book.isbn):
            raise ValueError("Book creation failed due to uniqueness constraint")
        book.id = self._next_id
        self._next_id += 1
        self._rows[book.id] = book
        return book

    def update(self, book: Book) -> Book:
        self._rows[book.id] = book
        return book

    def delete(self, book: Book) -> None:
        self._rows.pop(book.id, None)


# ----------------------------------------
# Accounts
# ----------------------------------------

class FakeRoleRepo:
    def __init__(self) -> None:
        self._rows: Dict[RoleName, Role] = {}

    def find_by_name(self, name: RoleName) -> Optional[Role]:
        return self._rows.get(RoleName(name))

    def create(self, name: RoleName) -> Role:
        name = RoleName(name)
        if name in self._rows:
            raise ValueError(f"Role {name.value} already exists")
        role = Role(id=len(self._rows) + 1, name=name)
        self._rows[name] = role
        return role


class FakeUserRepo:
    def __init__(self) -> None:
        self._rows: Dict[int, User] = {}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._rows.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        wanted = email.strip().lower()
        return next((u for u in self._rows.values() if u.email == wanted), None)

    def exists_by_email(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    def create(self, user: User) -> User:
        user.email = user.email.strip().lower()
        if self.exists_by_email(user.email):
            raise ValueError("User creation failed due to uniqueness constraint")
        user.id = len(self._rows) + 1
        self._rows[user.id] = user
        return user


# ----------------------------------------
# Shopping carts
# ----------------------------------------

class FakeShoppingCartRepo:
    def __init__(self, book_repo: FakeBookRepo) -> None:
        self.book_repo = book_repo
        self._carts: Dict[int, ShoppingCart] = {}
        self._next_item_id = 1

    def get_by_user_id(self, user_id: int) -> Optional[ShoppingCart]:
        return next((c for c in self._carts.values() if c.user_id == user_id), None)

    def create_for_user(self, user_id: int) -> ShoppingCart:
        if self.get_by_user_id(user_id) is not None:
            raise ValueError("User already has a shopping cart")
        cart = ShoppingCart(id=len(self._carts) + 1, user_id=user_id)
        self._carts[cart.id] = cart
        return cart

    def get_item(self, cart_id: int, item_id: int) -> Optional[CartItem]:
        cart = self._carts.get(cart_id)
        if cart is None:
            return None
        return next((i for i in cart.cart_items if i.id == item_id), None)

    def find_item_by_book(self, cart_id: int, book_id: int) -> Optional[CartItem]:
        cart = self._carts.get(cart_id)
        if cart is None:
            return None
        return next((i for i in cart.cart_items if i.book_id == book_id), None)

    def add_item(self, cart_id: int, book_id: int, quantity: int) -> CartItem:
        if quantity < 1:
            raise ValueError("quantity must be positive")
        item = CartItem(
            id=self._next_item_id,
            book_id=book_id,
            book=self.book_repo.get_by_id(book_id),
            quantity=quantity,
        )
        self._next_item_id += 1
        self._carts[cart_id].cart_items.append(item)
        return item

    def update_item_quantity(self, item: CartItem, quantity: int) -> CartItem:
        if quantity < 1:
            raise ValueError("quantity must be positive")
        item.quantity = quantity
        return item

    def delete_item(self, item: CartItem) -> None:
        for cart in self._carts.values():
            if item in cart.cart_items:
                cart.cart_items.remove(item)
