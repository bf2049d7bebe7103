"""
Book service.

Enforces ISBN uniqueness and resolves category ids before persisting.
"""

from __future__ import annotations

from typing import Iterable, List

from bookstore.core.contracts import BookRepo, CategoryRepo
from bookstore.core.errors import ConflictError, NotFoundError
from bookstore.core.logging import get_logger
from bookstore.core.pagination import PageRequest
from bookstore.models.book import Book
from bookstore.models.category import Category
from bookstore.schemas.book import BookDto, BookSearchParameters, CreateBookRequestDto
from bookstore.schemas.common import Page

__all__ = ["BookService"]

log = get_logger(__name__)


class BookService:
    def __init__(self, book_repo: BookRepo, category_repo: CategoryRepo) -> None:
        self.book_repo = book_repo
        self.category_repo = category_repo

    def _get_or_404(self, book_id: int) -> Book:
        book = self.book_repo.get_by_id(book_id)
        if book is None:
            raise NotFoundError(f"Can't find book by id {book_id}")
        return book

    def _resolve_categories(self, category_ids: Iterable[int]) -> List[Category]:
        wanted = set(category_ids)
        found = list(self.category_repo.get_many(wanted))
        missing = sorted(wanted - {c.id for c in found})
        if missing:
            raise NotFoundError("Unknown category ids", details={"category_ids": missing})
        return found

    def find_all(self, page_request: PageRequest) -> Page[BookDto]:
        return Page[BookDto].from_result(self.book_repo.list(page_request), BookDto.model_validate)

    def search(self, params: BookSearchParameters, page_request: PageRequest) -> Page[BookDto]:
        return Page[BookDto].from_result(self.book_repo.search(params, page_request), BookDto.model_validate)

    def get_by_id(self, book_id: int) -> BookDto:
        return BookDto.model_validate(self._get_or_404(book_id))

    def save(self, request: CreateBookRequestDto) -> BookDto:
        if self.book_repo.exists_by_isbn(request.isbn):
            raise ConflictError(f"Book with isbn {request.isbn} already exists")
        book = Book(
            title=request.title,
            author=request.author,
            isbn=request.isbn,
            price=request.price,
            description=request.description,
            cover_image=request.cover_image,
            categories=self._resolve_categories(request.category_ids),
        )
        try:
            book = self.book_repo.create(book)
        except ValueError as exc:
            raise ConflictError(str(exc)) from exc
        log.info("book_created", extra={"book_id": book.id, "isbn": book.isbn})
        return BookDto.model_validate(book)

    def update(self, book_id: int, request: CreateBookRequestDto) -> BookDto:
        book = self._get_or_404(book_id)
        if request.isbn != book.isbn and self.book_repo.exists_by_isbn(request.isbn):
            raise ConflictError(f"Book with isbn {request.isbn} already exists")
        categories = self._resolve_categories(request.category_ids)
        book.title = request.title
        book.author = request.author
        book.isbn = request.isbn
        book.price = request.price
        book.description = request.description
        book.cover_image = request.cover_image
        book.categories = categories
        try:
            book = self.book_repo.update(book)
        except ValueError as exc:
            raise ConflictError(str(exc)) from exc
        log.info("book_updated", extra={"book_id": book.id})
        return BookDto.model_validate(book)

    def delete_by_id(self, book_id: int) -> None:
        self.book_repo.delete(self._get_or_404(book_id))
        log.info("book_deleted", extra={"book_id": book_id})
