"""
Shared schema pieces: the ORM-aware base model, the generic Page envelope and
the id bound shared by request models and path parameters.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from bookstore.core.pagination import PageResult

__all__ = ["ORMBase", "Page", "MAX_ID"]

T = TypeVar("T")

# Largest value a 64-bit signed INTEGER column holds
MAX_ID = 2**63 - 1


class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class Page(BaseModel, Generic[T]):
    """
    One page of results. `page` is 0-based.
    """
    content: List[T] = Field(default_factory=list)
    page: int = Field(..., ge=0)
    size: int = Field(..., ge=1)
    total_elements: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)

    @classmethod
    def from_result(cls, result: PageResult, convert: Optional[Callable[[Any], T]] = None) -> "Page[T]":
        items = [convert(row) for row in result.content] if convert else list(result.content)
        return cls(
            content=items,
            page=result.page,
            size=result.size,
            total_elements=result.total_elements,
            total_pages=result.total_pages,
        )
