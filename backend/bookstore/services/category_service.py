"""
Category service.

Maps between Category rows and DTOs and enforces name uniqueness and
existence checks. Listing the books of a category lives here as well because
a missing category must be reported as not found rather than as an empty page.
"""

from __future__ import annotations

from bookstore.core.contracts import BookRepo, CategoryRepo
from bookstore.core.errors import ConflictError, NotFoundError
from bookstore.core.logging import get_logger
from bookstore.core.pagination import PageRequest
from bookstore.models.category import Category
from bookstore.schemas.book import BookDtoWithoutCategoryIds
from bookstore.schemas.category import CategoryDto, CreateCategoryRequestDto
from bookstore.schemas.common import Page

__all__ = ["CategoryService"]

log = get_logger(__name__)


class CategoryService:
    def __init__(self, category_repo: CategoryRepo, book_repo: BookRepo) -> None:
        self.category_repo = category_repo
        self.book_repo = book_repo

    def _get_or_404(self, category_id: int) -> Category:
        category = self.category_repo.get_by_id(category_id)
        if category is None:
            raise NotFoundError(f"Can't find category by id {category_id}")
        return category

    def find_all(self, page_request: PageRequest) -> Page[CategoryDto]:
        return Page[CategoryDto].from_result(self.category_repo.list(page_request), CategoryDto.model_validate)

    def get_by_id(self, category_id: int) -> CategoryDto:
        return CategoryDto.model_validate(self._get_or_404(category_id))

    def save(self, request: CreateCategoryRequestDto) -> CategoryDto:
        if self.category_repo.exists_by_name(request.name):
            raise ConflictError(f"Category '{request.name}' already exists")
        try:
            category = self.category_repo.create(
                Category(name=request.name, description=request.description)
            )
        except ValueError as exc:
            raise ConflictError(str(exc)) from exc
        log.info("category_created", extra={"category_id": category.id})
        return CategoryDto.model_validate(category)

    def update(self, category_id: int, request: CreateCategoryRequestDto) -> CategoryDto:
        category = self._get_or_404(category_id)
        renamed = category.name.lower() != request.name.lower()
        if renamed and self.category_repo.exists_by_name(request.name):
            raise ConflictError(f"Category '{request.name}' already exists")
        category.name = request.name
        category.description = request.description
        try:
            category = self.category_repo.update(category)
        except ValueError as exc:
            raise ConflictError(str(exc)) from exc
        log.info("category_updated", extra={"category_id": category.id})
        return CategoryDto.model_validate(category)

    def delete_by_id(self, category_id: int) -> None:
        self.category_repo.delete(self._get_or_404(category_id))
        log.info("category_deleted", extra={"category_id": category_id})

    def get_books_by_category_id(
        self, category_id: int, page_request: PageRequest
    ) -> Page[BookDtoWithoutCategoryIds]:
        self._get_or_404(category_id)
        result = self.book_repo.find_by_category_id(category_id, page_request)
        return Page[BookDtoWithoutCategoryIds].from_result(result, BookDtoWithoutCategoryIds.model_validate)
