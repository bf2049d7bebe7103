"""
Offset pagination shared by repositories and routes.

- PageRequest: 0-based page index, page size and sort orders ("field[,asc|desc]").
- PageResult: one slice of rows plus the total row count.
- paginate(): applies count/order/offset/limit to a SQLAlchemy select.

Sort fields are resolved against a per-repository whitelist of columns, so
clients can only order by columns a repository exposes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Generic, List, Mapping, Sequence, Tuple, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from bookstore.core.errors import BadRequestError

__all__ = ["SortOrder", "PageRequest", "PageResult", "parse_sort", "paginate"]

T = TypeVar("T")

_DIRECTIONS = {"asc", "desc"}


@dataclass(frozen=True)
class SortOrder:
    field: str
    direction: str = "asc"

    @property
    def descending(self) -> bool:
        return self.direction == "desc"


def parse_sort(values: Sequence[str]) -> Tuple[SortOrder, ...]:
    """
    Parse sort expressions such as ["title,desc", "author"].

    Raises:
        BadRequestError: on an empty field or an unknown direction.
    """
    orders: List[SortOrder] = []
    for raw in values or ():
        parts = [p.strip() for p in raw.split(",")]
        name = parts[0]
        if not name:
            raise BadRequestError("Sort field must not be empty", details={"sort": raw})
        direction = parts[1].lower() if len(parts) > 1 and parts[1] else "asc"
        if direction not in _DIRECTIONS or len(parts) > 2:
            raise BadRequestError(
                "Sort must look like 'field' or 'field,asc|desc'",
                details={"sort": raw},
            )
        orders.append(SortOrder(field=name, direction=direction))
    return tuple(orders)


@dataclass(frozen=True)
class PageRequest:
    page: int = 0
    size: int = 20
    sort: Tuple[SortOrder, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError("page must be >= 0")
        if self.size < 1:
            raise ValueError("size must be >= 1")

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass
class PageResult(Generic[T]):
    content: List[T]
    page: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.size else 0


def _order_by(page_request: PageRequest, sortable: Mapping[str, Any]) -> List[Any]:
    clauses: List[Any] = []
    for order in page_request.sort:
        column = sortable.get(order.field)
        if column is None:
            raise BadRequestError(
                f"Cannot sort by '{order.field}'",
                details={"allowed": sorted(sortable)},
            )
        clauses.append(column.desc() if order.descending else column.asc())
    return clauses


def paginate(
    session: Session,
    stmt: Select,
    page_request: PageRequest,
    *,
    sortable: Mapping[str, Any],
    default_order: Sequence[Any],
) -> PageResult:
    """
    Run `stmt` for one page and count the full result set.

    The default order is appended after client orders so paging stays stable.
    """
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = int(session.execute(count_stmt).scalar_one())

    ordered = stmt.order_by(*_order_by(page_request, sortable), *default_order)
    rows = session.execute(ordered.offset(page_request.offset).limit(page_request.size)).scalars().all()
    return PageResult(
        content=list(rows),
        page=page_request.page,
        size=page_request.size,
        total_elements=total,
    )
