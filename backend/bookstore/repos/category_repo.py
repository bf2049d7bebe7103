"""
SQLAlchemy-based Category repository.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from sqlalchemy import exists, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookstore.core.pagination import PageRequest, PageResult, paginate
from bookstore.models.category import Category

__all__ = ["SqlAlchemyCategoryRepo", "CATEGORY_SORT_FIELDS"]

CATEGORY_SORT_FIELDS = {
    "id": Category.id,
    "name": Category.name,
}


class SqlAlchemyCategoryRepo:
    """
    Concrete Category repository using SQLAlchemy ORM.
    """

    def __init__(self, session: Session) -> None:
        if not isinstance(session, Session):
            raise TypeError("session must be an instance of sqlalchemy.orm.Session")
        self.session = session

    def get_by_id(self, category_id: int) -> Optional[Category]:
        return self.session.get(Category, int(category_id))

    def get_many(self, category_ids: Iterable[int]) -> Sequence[Category]:
        ids = {int(cid) for cid in category_ids}
        if not ids:
            return []
        stmt = select(Category).where(Category.id.in_(ids)).order_by(Category.id)
        return list(self.session.execute(stmt).scalars().all())

    def list(self, page_request: PageRequest) -> PageResult[Category]:
        return paginate(
            self.session,
            select(Category),
            page_request,
            sortable=CATEGORY_SORT_FIELDS,
            default_order=[Category.id.asc()],
        )

    def exists_by_name(self, name: str) -> bool:
        if not isinstance(name, str) or not name.strip():
            return False
        stmt = select(exists().where(func.lower(Category.name) == name.strip().lower()))
        return bool(self.session.execute(stmt).scalar())

    def create(self, category: Category) -> Category:
        self.session.add(category)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError("Category creation failed due to uniqueness constraint") from exc
        self.session.refresh(category)
        return category

    def update(self, category: Category) -> Category:
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError("Category update failed due to uniqueness constraint") from exc
        self.session.refresh(category)
        return category

    def delete(self, category: Category) -> None:
        self.session.delete(category)
        self.session.commit()
