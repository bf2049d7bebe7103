import os
import sys

import pytest

# Ensure the 'backend' directory is on sys.path so imports work from repo root
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from bookstore.core.errors import NotFoundError
from bookstore.models.user import User
from bookstore.schemas.cart import CartItemOperation, CreateCartItemRequestDto, UpdateCartItemRequestDto
from bookstore.services.shopping_cart_service import ShoppingCartService

from fakes import FakeBookRepo, FakeShoppingCartRepo


@pytest.fixture
def books():
    repo = FakeBookRepo()
    repo.add("Dune", "978-0441172719")
    repo.add("Emma", "978-0141439587")
    return repo


@pytest.fixture
def carts(books):
    return FakeShoppingCartRepo(books)


@pytest.fixture
def service(carts, books):
    return ShoppingCartService(cart_repo=carts, book_repo=books)


def _user(user_id: int) -> User:
    return User(id=user_id, email=f"user{user_id}@mail.com", password="x", first_name="F", last_name="L")


def test_get_cart_creates_cart_on_first_use(service, carts):
    cart = service.get_cart(_user(7))

    assert cart.user_id == 7
    assert cart.cart_items == []
    # Second call returns the same cart
    assert service.get_cart(_user(7)).id == cart.id


def test_add_book_then_same_book_again_merges_quantity(service):
    user = _user(1)
    service.add_book(user, CreateCartItemRequestDto(book_id=1, quantity=2))
    cart = service.add_book(user, CreateCartItemRequestDto(book_id=1, quantity=3))

    assert [(i.book_id, i.book_title, i.quantity) for i in cart.cart_items] == [(1, "Dune", 5)]


def test_add_unknown_book_raises_not_found(service):
    with pytest.raises(NotFoundError):
        service.add_book(_user(1), CreateCartItemRequestDto(book_id=99, quantity=1))


def test_update_item_increase_and_decrease(service):
    user = _user(1)
    item_id = service.add_book(user, CreateCartItemRequestDto(book_id=2, quantity=2)).cart_items[0].id

    cart = service.update_item(user, item_id, UpdateCartItemRequestDto(quantity=3))
    assert cart.cart_items[0].quantity == 5

    cart = service.update_item(
        user, item_id, UpdateCartItemRequestDto(operation=CartItemOperation.DECREASE, quantity=4)
    )
    assert cart.cart_items[0].quantity == 1


def test_update_item_decrease_below_zero_removes_item(service):
    user = _user(1)
    item_id = service.add_book(user, CreateCartItemRequestDto(book_id=1, quantity=1)).cart_items[0].id

    cart = service.update_item(
        user, item_id, UpdateCartItemRequestDto(operation=CartItemOperation.DECREASE, quantity=10)
    )
    assert cart.cart_items == []


def test_items_of_other_users_are_not_found(service):
    owner, other = _user(1), _user(2)
    item_id = service.add_book(owner, CreateCartItemRequestDto(book_id=1, quantity=1)).cart_items[0].id

    with pytest.raises(NotFoundError):
        service.update_item(other, item_id, UpdateCartItemRequestDto(quantity=1))
    with pytest.raises(NotFoundError):
        service.delete_item(other, item_id)

    # Owner's item is untouched
    assert service.get_cart(owner).cart_items[0].quantity == 1


def test_delete_item(service):
    user = _user(1)
    item_id = service.add_book(user, CreateCartItemRequestDto(book_id=1, quantity=1)).cart_items[0].id

    service.delete_item(user, item_id)

    assert service.get_cart(user).cart_items == []


def test_add_book_past_max_quantity_raises_bad_request(service):
    from bookstore.core.errors import BadRequestError
    from bookstore.schemas.cart import MAX_QUANTITY

    user = _user(1)
    service.add_book(user, CreateCartItemRequestDto(book_id=1, quantity=MAX_QUANTITY))

    with pytest.raises(BadRequestError):
        service.add_book(user, CreateCartItemRequestDto(book_id=1, quantity=1))
    assert service.get_cart(user).cart_items[0].quantity == MAX_QUANTITY
