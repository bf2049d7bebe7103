"""
Shopping cart API routes. All endpoints act on the caller's own cart.

Endpoints:
- GET    /cart                       -> current cart
- POST   /cart                       -> add a book (or grow its quantity)
- PUT    /cart/items/{cart_item_id}  -> increase/decrease an item quantity
- DELETE /cart/items/{cart_item_id}  -> remove an item
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Response, status

from bookstore.core.deps import get_cart_service, require_roles
from bookstore.models.role import RoleName
from bookstore.models.user import User
from bookstore.schemas.cart import CreateCartItemRequestDto, ShoppingCartDto, UpdateCartItemRequestDto
from bookstore.schemas.common import MAX_ID
from bookstore.services.shopping_cart_service import ShoppingCartService

router = APIRouter(prefix="/cart", tags=["shopping cart"])

require_customer = require_roles(RoleName.USER)


@router.get("", response_model=ShoppingCartDto)
def get_cart(
    user: User = Depends(require_customer),
    service: ShoppingCartService = Depends(get_cart_service),
) -> ShoppingCartDto:
    return service.get_cart(user)


@router.post("", response_model=ShoppingCartDto, status_code=status.HTTP_201_CREATED)
def add_book_to_cart(
    payload: CreateCartItemRequestDto,
    user: User = Depends(require_customer),
    service: ShoppingCartService = Depends(get_cart_service),
) -> ShoppingCartDto:
    return service.add_book(user, payload)


@router.put("/items/{cart_item_id}", response_model=ShoppingCartDto)
def update_cart_item(
    payload: UpdateCartItemRequestDto,
    cart_item_id: int = Path(..., ge=1, le=MAX_ID),
    user: User = Depends(require_customer),
    service: ShoppingCartService = Depends(get_cart_service),
) -> ShoppingCartDto:
    """
    INCREASE (default) adds `quantity`; DECREASE subtracts it and drops the item at zero.
    """
    return service.update_item(user, cart_item_id, payload)


@router.delete("/items/{cart_item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cart_item(
    cart_item_id: int = Path(..., ge=1, le=MAX_ID),
    user: User = Depends(require_customer),
    service: ShoppingCartService = Depends(get_cart_service),
) -> Response:
    service.delete_item(user, cart_item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
