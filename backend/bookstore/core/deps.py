"""
Dependency wiring for repositories, services, authentication and paging.

This module exposes factory functions that construct concrete implementations
behind the Protocol interfaces in bookstore.core.contracts. It must not contain
business logic.

Provided factories:
- get_book_repo / get_category_repo / get_role_repo / get_user_repo / get_cart_repo
- get_auth_service / get_book_service / get_category_service / get_cart_service
- get_current_user, require_roles(...): bearer-token authentication and role checks
- get_page_request: page/size/sort query parameters
"""

from __future__ import annotations

from typing import Callable, List, Optional

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from bookstore.core.config import get_settings
from bookstore.core.contracts import BookRepo, CategoryRepo, RoleRepo, ShoppingCartRepo, UserRepo
from bookstore.core.errors import AuthError, BadRequestError, ForbiddenError
from bookstore.core.pagination import PageRequest, parse_sort
from bookstore.core.security import get_jwt_util
from bookstore.db.session import get_db
from bookstore.models.role import RoleName
from bookstore.models.user import User
from bookstore.repos.book_repo import SqlAlchemyBookRepo
from bookstore.repos.category_repo import SqlAlchemyCategoryRepo
from bookstore.repos.role_repo import SqlAlchemyRoleRepo
from bookstore.repos.shopping_cart_repo import SqlAlchemyShoppingCartRepo
from bookstore.repos.user_repo import SqlAlchemyUserRepo
from bookstore.schemas.common import MAX_ID
from bookstore.services.auth_service import AuthService
from bookstore.services.book_service import BookService
from bookstore.services.category_service import CategoryService
from bookstore.services.shopping_cart_service import ShoppingCartService

__all__ = [
    # repos
    "get_book_repo",
    "get_category_repo",
    "get_role_repo",
    "get_user_repo",
    "get_cart_repo",
    # services
    "get_auth_service",
    "get_book_service",
    "get_category_service",
    "get_cart_service",
    # auth
    "get_current_user",
    "require_roles",
    "require_user",
    "require_admin",
    # paging
    "get_page_request",
]

# auto_error=False so a missing header goes through our AuthError (401) shape
bearer_scheme = HTTPBearer(auto_error=False)

# -------------------------------
# Repository Providers
# -------------------------------

def get_book_repo(db: Session = Depends(get_db)) -> BookRepo:
    """Provide a BookRepo bound to the current DB session."""
    return SqlAlchemyBookRepo(db)


def get_category_repo(db: Session = Depends(get_db)) -> CategoryRepo:
    """Provide a CategoryRepo bound to the current DB session."""
    return SqlAlchemyCategoryRepo(db)


def get_role_repo(db: Session = Depends(get_db)) -> RoleRepo:
    return SqlAlchemyRoleRepo(db)


def get_user_repo(db: Session = Depends(get_db)) -> UserRepo:
    return SqlAlchemyUserRepo(db)


def get_cart_repo(db: Session = Depends(get_db)) -> ShoppingCartRepo:
    return SqlAlchemyShoppingCartRepo(db)

# -------------------------------
# Service Providers
# -------------------------------

def get_auth_service(
    user_repo: UserRepo = Depends(get_user_repo),
    role_repo: RoleRepo = Depends(get_role_repo),
    cart_repo: ShoppingCartRepo = Depends(get_cart_repo),
) -> AuthService:
    return AuthService(user_repo=user_repo, role_repo=role_repo, cart_repo=cart_repo, jwt_util=get_jwt_util())


def get_book_service(
    book_repo: BookRepo = Depends(get_book_repo),
    category_repo: CategoryRepo = Depends(get_category_repo),
) -> BookService:
    return BookService(book_repo=book_repo, category_repo=category_repo)


def get_category_service(
    category_repo: CategoryRepo = Depends(get_category_repo),
    book_repo: BookRepo = Depends(get_book_repo),
) -> CategoryService:
    return CategoryService(category_repo=category_repo, book_repo=book_repo)


def get_cart_service(
    cart_repo: ShoppingCartRepo = Depends(get_cart_repo),
    book_repo: BookRepo = Depends(get_book_repo),
) -> ShoppingCartService:
    return ShoppingCartService(cart_repo=cart_repo, book_repo=book_repo)

# -------------------------------
# Authentication
# -------------------------------

def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """
    Resolve the user behind `Authorization: Bearer <token>`.

    Raises:
        AuthError: header missing, token invalid/expired, or user gone.
    """
    if credentials is None or not credentials.credentials:
        raise AuthError("Missing bearer token")
    return auth_service.user_from_token(credentials.credentials)


def require_roles(*roles: RoleName) -> Callable[..., User]:
    """
    Build a dependency that admits users holding any of `roles`.
    """
    allowed = set(roles)

    def _dependency(user: User = Depends(get_current_user)) -> User:
        if not (user.role_names & allowed):
            raise ForbiddenError(
                "Access denied",
                details={"required_roles": sorted(r.value for r in allowed)},
            )
        return user

    return _dependency


require_user = require_roles(RoleName.USER, RoleName.ADMIN)
require_admin = require_roles(RoleName.ADMIN)

# -------------------------------
# Paging
# -------------------------------

def get_page_request(
    page: int = Query(0, ge=0, description="0-based page index"),
    size: Optional[int] = Query(None, ge=1, description="Page size"),
    sort: List[str] = Query(default=[], description="Sort order, e.g. title,desc (repeatable)"),
) -> PageRequest:
    settings = get_settings()
    effective = min(size or settings.default_page_size, settings.max_page_size)
    if page * effective > MAX_ID:
        raise BadRequestError("Page is out of range", details={"page": page, "size": effective})
    return PageRequest(page=page, size=effective, sort=parse_sort(sort))
