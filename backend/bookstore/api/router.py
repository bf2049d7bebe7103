"""
Shared API router.

- Aggregates sub-routers from bookstore.api.routes.* modules.
- Uses no top-level prefix; each sub-router owns its path (/auth, /books, ...).

Sub-routers included:
- bookstore.api.routes.auth        -> /auth
- bookstore.api.routes.books       -> /books
- bookstore.api.routes.categories  -> /categories
- bookstore.api.routes.cart        -> /cart
"""

from __future__ import annotations

import importlib
from typing import List

from fastapi import APIRouter

__all__ = ["router", "INCLUDED_MODULES", "ROUTE_MODULES"]

ROUTE_MODULES = (
    "bookstore.api.routes.auth",
    "bookstore.api.routes.books",
    "bookstore.api.routes.categories",
    "bookstore.api.routes.cart",
)

router = APIRouter()


def _include_subrouter(parent: APIRouter, module_path: str) -> APIRouter:
    """
    Import a route module and include its module-level `router`.
    """
    module = importlib.import_module(module_path)
    sub = getattr(module, "router", None)
    if not isinstance(sub, APIRouter):
        raise TypeError(f"{module_path}.router must be an APIRouter")
    parent.include_router(sub)
    return sub


def _include_known_subrouters(parent: APIRouter) -> List[str]:
    included: List[str] = []
    for mod in ROUTE_MODULES:
        _include_subrouter(parent, mod)
        included.append(mod)
    return included


INCLUDED_MODULES = _include_known_subrouters(router)
