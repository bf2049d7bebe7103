"""
Book API routes.

Endpoints:
- GET    /books            -> page of books (any user)
- GET    /books/search     -> filtered page of books (any user)
- GET    /books/{id}       -> one book (any user)
- POST   /books            -> create (admin)
- PUT    /books/{id}       -> update (admin)
- DELETE /books/{id}       -> delete (admin)
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Response, status
from pydantic import ValidationError

from bookstore.core.deps import get_book_service, get_page_request, require_admin, require_user
from bookstore.core.errors import BadRequestError
from bookstore.core.pagination import PageRequest
from bookstore.models.user import User
from bookstore.schemas.book import BookDto, BookSearchParameters, CreateBookRequestDto
from bookstore.schemas.common import MAX_ID, Page
from bookstore.services.book_service import BookService

router = APIRouter(prefix="/books", tags=["books"])


def get_search_parameters(
    title: Optional[str] = Query(None),
    author: Optional[str] = Query(None),
    isbn: Optional[str] = Query(None),
    min_price: Optional[Decimal] = Query(None, ge=0),
    max_price: Optional[Decimal] = Query(None, ge=0),
) -> BookSearchParameters:
    try:
        return BookSearchParameters(
            title=title,
            author=author,
            isbn=isbn,
            min_price=min_price,
            max_price=max_price,
        )
    except ValidationError as exc:
        raise BadRequestError("Invalid search parameters", details={"errors": exc.errors(include_url=False, include_context=False)}) from exc


@router.get("", response_model=Page[BookDto])
def get_all(
    page_request: PageRequest = Depends(get_page_request),
    service: BookService = Depends(get_book_service),
    _user: User = Depends(require_user),
) -> Page[BookDto]:
    """
    List books (paginated).
    """
    return service.find_all(page_request)


@router.get("/search", response_model=Page[BookDto])
def search(
    params: BookSearchParameters = Depends(get_search_parameters),
    page_request: PageRequest = Depends(get_page_request),
    service: BookService = Depends(get_book_service),
    _user: User = Depends(require_user),
) -> Page[BookDto]:
    """
    Search books by title/author substring, exact ISBN and price range.
    """
    return service.search(params, page_request)


@router.get("/{book_id}", response_model=BookDto)
def get_book_by_id(
    book_id: int = Path(..., ge=1, le=MAX_ID),
    service: BookService = Depends(get_book_service),
    _user: User = Depends(require_user),
) -> BookDto:
    return service.get_by_id(book_id)


@router.post("", response_model=BookDto, status_code=status.HTTP_201_CREATED)
def create_book(
    payload: CreateBookRequestDto,
    service: BookService = Depends(get_book_service),
    _admin: User = Depends(require_admin),
) -> BookDto:
    return service.save(payload)


@router.put("/{book_id}", response_model=BookDto, status_code=status.HTTP_201_CREATED)
def update_book(
    payload: CreateBookRequestDto,
    book_id: int = Path(..., ge=1, le=MAX_ID),
    service: BookService = Depends(get_book_service),
    _admin: User = Depends(require_admin),
) -> BookDto:
    return service.update(book_id, payload)


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(
    book_id: int = Path(..., ge=1, le=MAX_ID),
    service: BookService = Depends(get_book_service),
    _admin: User = Depends(require_admin),
) -> Response:
    service.delete_by_id(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
