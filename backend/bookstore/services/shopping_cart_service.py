"""
Shopping cart service.

Rules:
- Each user has one cart; it is created on first use if registration did not.
- Adding a book already in the cart increases that item's quantity.
- INCREASE adds to the item quantity; DECREASE subtracts and removes the item
  once the result drops to zero or below.
- One item holds at most MAX_QUANTITY copies; growing past it is a bad request.
- Items are looked up within the caller's cart only; others are not found.
"""

from __future__ import annotations

from bookstore.core.contracts import BookRepo, ShoppingCartRepo
from bookstore.core.errors import BadRequestError, NotFoundError
from bookstore.core.logging import get_logger
from bookstore.models.shopping_cart import CartItem, ShoppingCart
from bookstore.models.user import User
from bookstore.schemas.cart import (
    CartItemDto,
    CartItemOperation,
    CreateCartItemRequestDto,
    MAX_QUANTITY,
    ShoppingCartDto,
    UpdateCartItemRequestDto,
)

__all__ = ["ShoppingCartService"]

log = get_logger(__name__)


def _to_item_dto(item: CartItem) -> CartItemDto:
    return CartItemDto(
        id=item.id,
        book_id=item.book_id,
        book_title=item.book.title,
        quantity=item.quantity,
    )


def _to_cart_dto(cart: ShoppingCart) -> ShoppingCartDto:
    return ShoppingCartDto(
        id=cart.id,
        user_id=cart.user_id,
        cart_items=[_to_item_dto(item) for item in cart.cart_items],
    )


class ShoppingCartService:
    def __init__(self, cart_repo: ShoppingCartRepo, book_repo: BookRepo) -> None:
        self.cart_repo = cart_repo
        self.book_repo = book_repo

    def _cart_for(self, user: User) -> ShoppingCart:
        cart = self.cart_repo.get_by_user_id(user.id)
        if cart is None:
            cart = self.cart_repo.create_for_user(user.id)
        return cart

    def _item_or_404(self, cart: ShoppingCart, item_id: int) -> CartItem:
        item = self.cart_repo.get_item(cart.id, item_id)
        if item is None:
            raise NotFoundError(f"Can't find cart item by id {item_id}")
        return item

    @staticmethod
    def _grown(item: CartItem, quantity: int) -> int:
        total = item.quantity + quantity
        if total > MAX_QUANTITY:
            raise BadRequestError(
                f"Cart item quantity cannot exceed {MAX_QUANTITY}",
                details={"item_id": item.id, "quantity": total},
            )
        return total

    def get_cart(self, user: User) -> ShoppingCartDto:
        return _to_cart_dto(self._cart_for(user))

    def add_book(self, user: User, request: CreateCartItemRequestDto) -> ShoppingCartDto:
        if self.book_repo.get_by_id(request.book_id) is None:
            raise NotFoundError(f"Can't find book by id {request.book_id}")
        cart = self._cart_for(user)
        existing = self.cart_repo.find_item_by_book(cart.id, request.book_id)
        if existing is not None:
            self.cart_repo.update_item_quantity(existing, self._grown(existing, request.quantity))
        else:
            self.cart_repo.add_item(cart.id, request.book_id, request.quantity)
        log.info(
            "cart_item_added",
            extra={"cart_id": cart.id, "book_id": request.book_id, "quantity": request.quantity},
        )
        return _to_cart_dto(cart)

    def update_item(self, user: User, item_id: int, request: UpdateCartItemRequestDto) -> ShoppingCartDto:
        cart = self._cart_for(user)
        item = self._item_or_404(cart, item_id)
        if request.operation is CartItemOperation.DECREASE:
            remaining = item.quantity - request.quantity
            if remaining <= 0:
                self.cart_repo.delete_item(item)
                log.info("cart_item_removed", extra={"cart_id": cart.id, "item_id": item_id})
                return _to_cart_dto(cart)
            self.cart_repo.update_item_quantity(item, remaining)
        else:
            self.cart_repo.update_item_quantity(item, self._grown(item, request.quantity))
        return _to_cart_dto(cart)

    def delete_item(self, user: User, item_id: int) -> None:
        cart = self._cart_for(user)
        self.cart_repo.delete_item(self._item_or_404(cart, item_id))
        log.info("cart_item_removed", extra={"cart_id": cart.id, "item_id": item_id})
