"""
Book DTOs.

- BookDto: full representation including linked category ids.
- BookDtoWithoutCategoryIds: used when listing the books of one category.
- CreateBookRequestDto: payload for create and update.
- BookSearchParameters: optional filters for /books/search.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Set

from pydantic import BaseModel, Field, field_serializer, field_validator, model_validator

from bookstore.schemas.common import MAX_ID, ORMBase

__all__ = [
    "BookDto",
    "BookDtoWithoutCategoryIds",
    "CreateBookRequestDto",
    "BookSearchParameters",
]

_ISBN_PATTERN = r"^[0-9][0-9\- ]{8,15}[0-9Xx]$"


class BookDtoWithoutCategoryIds(ORMBase):
    id: int = Field(..., examples=[1])
    title: str = Field(..., examples=["The Hobbit"])
    author: str = Field(..., examples=["J. R. R. Tolkien"])
    isbn: str = Field(..., examples=["978-0261103344"])
    price: Decimal = Field(..., examples=[19.99])
    description: Optional[str] = None
    cover_image: Optional[str] = None

    @field_serializer("price")
    def _price_as_number(self, price: Decimal) -> float:
        return float(price)


class BookDto(BookDtoWithoutCategoryIds):
    category_ids: List[int] = Field(default_factory=list, description="Linked category ids")


class CreateBookRequestDto(BaseModel):
    title: str = Field(..., min_length=1, max_length=255, examples=["The Hobbit"])
    author: str = Field(..., min_length=1, max_length=255, examples=["J. R. R. Tolkien"])
    isbn: str = Field(..., pattern=_ISBN_PATTERN, description="ISBN-10 or ISBN-13", examples=["978-0261103344"])
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2, examples=[19.99])
    description: Optional[str] = Field(default=None, max_length=5000)
    cover_image: Optional[str] = Field(default=None, max_length=1024, examples=["https://example.com/hobbit.jpg"])
    category_ids: Set[int] = Field(default_factory=set, description="Ids of existing categories")

    @field_validator("title", "author", "isbn")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("category_ids")
    @classmethod
    def _positive_ids(cls, value: Set[int]) -> Set[int]:
        if any(cid < 1 or cid > MAX_ID for cid in value):
            raise ValueError("category ids must be positive 64-bit integers")
        return value


class BookSearchParameters(BaseModel):
    title: Optional[str] = Field(default=None, description="Case-insensitive substring of the title")
    author: Optional[str] = Field(default=None, description="Case-insensitive substring of the author")
    isbn: Optional[str] = Field(default=None, description="Exact ISBN")
    min_price: Optional[Decimal] = Field(default=None, ge=0)
    max_price: Optional[Decimal] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _price_range(self) -> "BookSearchParameters":
        if self.min_price is not None and self.max_price is not None and self.min_price > self.max_price:
            raise ValueError("min_price must not exceed max_price")
        return self
