"""
Shopping cart DTOs.
"""

from __future__ import annotations

import enum
from typing import List

from pydantic import BaseModel, Field

from bookstore.schemas.common import MAX_ID, ORMBase

__all__ = [
    "MAX_QUANTITY",
    "CartItemOperation",
    "CreateCartItemRequestDto",
    "UpdateCartItemRequestDto",
    "CartItemDto",
    "ShoppingCartDto",
]


# Upper bound for one cart line, requested or accumulated
MAX_QUANTITY = 10_000


class CartItemOperation(str, enum.Enum):
    INCREASE = "INCREASE"
    DECREASE = "DECREASE"


class CreateCartItemRequestDto(BaseModel):
    book_id: int = Field(..., gt=0, le=MAX_ID, description="Book to add", examples=[1])
    quantity: int = Field(..., gt=0, le=MAX_QUANTITY, description="Number of copies", examples=[2])


class UpdateCartItemRequestDto(BaseModel):
    operation: CartItemOperation = Field(
        default=CartItemOperation.INCREASE,
        description="Increase (default) or decrease the item quantity",
        examples=["INCREASE"],
    )
    quantity: int = Field(..., gt=0, le=MAX_QUANTITY, description="quantity", examples=[3])


class CartItemDto(ORMBase):
    id: int
    book_id: int
    book_title: str
    quantity: int


class ShoppingCartDto(ORMBase):
    id: int
    user_id: int
    cart_items: List[CartItemDto] = Field(default_factory=list)
