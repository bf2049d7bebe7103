"""
Category DTOs.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from bookstore.schemas.common import ORMBase

__all__ = ["CategoryDto", "CreateCategoryRequestDto"]


class CategoryDto(ORMBase):
    id: int = Field(..., description="Category identifier", examples=[1])
    name: str = Field(..., description="Category name", examples=["Fiction"])
    description: Optional[str] = Field(default=None, description="Category description")


class CreateCategoryRequestDto(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Category name", examples=["Fiction"])
    description: Optional[str] = Field(
        default=None,
        max_length=2000,
        description="Category description",
        examples=["Novels and short stories"],
    )

    @field_validator("name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value
