"""
SQLAlchemy-based Book repository.

Implements the BookRepo Protocol:
- get_by_id, list (paged), exists_by_isbn
- find_by_category_id (paged), search (paged, optional filters)
- create, update, delete
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import exists, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookstore.core.pagination import PageRequest, PageResult, paginate
from bookstore.models.book import Book, books_categories
from bookstore.schemas.book import BookSearchParameters

__all__ = ["SqlAlchemyBookRepo", "BOOK_SORT_FIELDS"]

BOOK_SORT_FIELDS = {
    "id": Book.id,
    "title": Book.title,
    "author": Book.author,
    "isbn": Book.isbn,
    "price": Book.price,
}


class SqlAlchemyBookRepo:
    """
    Concrete Book repository using SQLAlchemy ORM.
    """

    def __init__(self, session: Session) -> None:
        if not isinstance(session, Session):
            raise TypeError("session must be an instance of sqlalchemy.orm.Session")
        self.session = session

    # -------------------------------
    # Queries
    # -------------------------------

    def get_by_id(self, book_id: int) -> Optional[Book]:
        return self.session.get(Book, int(book_id))

    def list(self, page_request: PageRequest) -> PageResult[Book]:
        return self._page(select(Book), page_request)

    def exists_by_isbn(self, isbn: str) -> bool:
        if not isinstance(isbn, str) or not isbn.strip():
            return False
        stmt = select(exists().where(Book.isbn == isbn.strip()))
        return bool(self.session.execute(stmt).scalar())

    def find_by_category_id(self, category_id: int, page_request: PageRequest) -> PageResult[Book]:
        stmt = (
            select(Book)
            .join(books_categories, books_categories.c.book_id == Book.id)
            .where(books_categories.c.category_id == int(category_id))
        )
        return self._page(stmt, page_request)

    def search(self, params: BookSearchParameters, page_request: PageRequest) -> PageResult[Book]:
        """
        Filter books by any combination of title/author substring, exact ISBN and price range.
        `%` and `_` in the substrings match literally.
        """
        stmt = select(Book)
        if params.title:
            stmt = stmt.where(func.lower(Book.title).contains(params.title.strip().lower(), autoescape=True))
        if params.author:
            stmt = stmt.where(func.lower(Book.author).contains(params.author.strip().lower(), autoescape=True))
        if params.isbn:
            stmt = stmt.where(Book.isbn == params.isbn.strip())
        if params.min_price is not None:
            stmt = stmt.where(Book.price >= params.min_price)
        if params.max_price is not None:
            stmt = stmt.where(Book.price <= params.max_price)
        return self._page(stmt, page_request)

    def _page(self, stmt, page_request: PageRequest) -> PageResult[Book]:
        return paginate(
            self.session,
            stmt,
            page_request,
            sortable=BOOK_SORT_FIELDS,
            default_order=[Book.id.asc()],
        )

    # -------------------------------
    # Commands
    # -------------------------------

    def create(self, book: Book) -> Book:
        self.session.add(book)
        self._commit("Book creation failed due to uniqueness constraint")
        self.session.refresh(book)
        return book

    def update(self, book: Book) -> Book:
        self._commit("Book update failed due to uniqueness constraint")
        self.session.refresh(book)
        return book

    def delete(self, book: Book) -> None:
        self.session.delete(book)
        self.session.commit()

    def _commit(self, message: str) -> None:
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError(message) from exc
