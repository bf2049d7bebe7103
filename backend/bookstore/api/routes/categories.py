"""
Category API routes.

Endpoints:
- GET    /categories                 -> page of categories (any user)
- GET    /categories/{id}            -> one category (any user)
- GET    /categories/{id}/books      -> page of the category's books (any user)
- POST   /categories                 -> create (admin)
- PUT    /categories/{id}            -> update (admin)
- DELETE /categories/{id}            -> delete (admin)

Routes are thin: they delegate to CategoryService and return DTOs.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Response, status

from bookstore.core.deps import get_category_service, get_page_request, require_admin, require_user
from bookstore.core.pagination import PageRequest
from bookstore.models.user import User
from bookstore.schemas.book import BookDtoWithoutCategoryIds
from bookstore.schemas.category import CategoryDto, CreateCategoryRequestDto
from bookstore.schemas.common import MAX_ID, Page
from bookstore.services.category_service import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=Page[CategoryDto])
def get_all(
    page_request: PageRequest = Depends(get_page_request),
    service: CategoryService = Depends(get_category_service),
    _user: User = Depends(require_user),
) -> Page[CategoryDto]:
    """
    List categories (paginated).
    """
    return service.find_all(page_request)


@router.get("/{category_id}", response_model=CategoryDto)
def get_category_by_id(
    category_id: int = Path(..., ge=1, le=MAX_ID),
    service: CategoryService = Depends(get_category_service),
    _user: User = Depends(require_user),
) -> CategoryDto:
    return service.get_by_id(category_id)


@router.get("/{category_id}/books", response_model=Page[BookDtoWithoutCategoryIds])
def get_books_by_category_id(
    category_id: int = Path(..., ge=1, le=MAX_ID),
    page_request: PageRequest = Depends(get_page_request),
    service: CategoryService = Depends(get_category_service),
    _user: User = Depends(require_user),
) -> Page[BookDtoWithoutCategoryIds]:
    """
    List the books linked to a category (paginated).
    """
    return service.get_books_by_category_id(category_id, page_request)


@router.post("", response_model=CategoryDto, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CreateCategoryRequestDto,
    service: CategoryService = Depends(get_category_service),
    _admin: User = Depends(require_admin),
) -> CategoryDto:
    return service.save(payload)


@router.put("/{category_id}", response_model=CategoryDto, status_code=status.HTTP_201_CREATED)
def update_category(
    payload: CreateCategoryRequestDto,
    category_id: int = Path(..., ge=1, le=MAX_ID),
    service: CategoryService = Depends(get_category_service),
    _admin: User = Depends(require_admin),
) -> CategoryDto:
    """
    Replace a category's name and description. Responds 201 with the new representation.
    """
    return service.update(category_id, payload)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int = Path(..., ge=1, le=MAX_ID),
    service: CategoryService = Depends(get_category_service),
    _admin: User = Depends(require_admin),
) -> Response:
    service.delete_by_id(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
