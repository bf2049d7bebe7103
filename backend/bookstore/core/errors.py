"""
API error types and exception handlers.

- Defines a small hierarchy of ApiError exceptions.
- Maps errors (including request validation failures) to a consistent JSON shape for clients.
- Registers FastAPI exception handlers.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookstore.core.logging import get_logger

__all__ = [
    "ApiError",
    "BadRequestError",
    "AuthError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "ErrorBody",
    "ErrorResponse",
    "register_exception_handlers",
]

log = get_logger(__name__)


# -------------------------------
# Error response models
# -------------------------------

class ErrorBody(BaseModel):
    code: str = Field(..., description="Stable machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict = Field(default_factory=dict, description="Optional structured details")


class ErrorResponse(BaseModel):
    error: ErrorBody
    request_id: Optional[str] = Field(default=None, description="Client-supplied correlation/request id")


# -------------------------------
# Exception types
# -------------------------------

class ApiError(Exception):
    """
    Base API error with HTTP status and machine code.
    """
    status_code: int = 400
    code: str = "bad_request"

    def __init__(self, message: str, *, details: Optional[dict] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class BadRequestError(ApiError):
    status_code = 400
    code = "bad_request"


class AuthError(ApiError):
    status_code = 401
    code = "unauthorized"


class ForbiddenError(ApiError):
    status_code = 403
    code = "forbidden"


class NotFoundError(ApiError):
    status_code = 404
    code = "not_found"


class ConflictError(ApiError):
    status_code = 409
    code = "conflict"


_HTTP_CODES: Dict[int, str] = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
}


# -------------------------------
# Handlers
# -------------------------------

def _request_id(request: Request) -> Optional[str]:
    state_id = getattr(request.state, "request_id", None)
    return state_id or request.headers.get("x-request-id") or request.headers.get("x-correlation-id")


def _request_id_header(request: Request) -> Optional[Dict[str, str]]:
    req_id = _request_id(request)
    return {"X-Request-ID": req_id} if req_id else None


def _make_json_response(
    request: Request,
    *,
    status_code: int,
    code: str,
    message: str,
    details: Optional[dict] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    body = ErrorResponse(
        error=ErrorBody(code=code, message=message, details=details or {}),
        request_id=_request_id(request),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"), headers=headers)


async def api_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    ApiError subclasses carry their own status and code.
    """
    assert isinstance(exc, ApiError)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return _make_json_response(
        request,
        status_code=exc.status_code,
        code=exc.code,
        message=exc.message,
        details=exc.details,
        headers=headers,
    )


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Request body/query validation failures are reported as 400 validation_error.
    """
    errors: Any = exc.errors() if isinstance(exc, (RequestValidationError, ValidationError)) else str(exc)
    return _make_json_response(
        request,
        status_code=400,
        code="validation_error",
        message="Validation error",
        details={"errors": jsonable_encoder(errors)},
    )


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Framework-raised HTTP errors (unknown route, wrong method) keep their status.
    """
    assert isinstance(exc, StarletteHTTPException)
    return _make_json_response(
        request,
        status_code=exc.status_code,
        code=_HTTP_CODES.get(exc.status_code, "http_error"),
        message=str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Last-resort 500. Runs outside the request middleware, so it sets X-Request-ID itself.
    """
    log.exception(
        "unhandled_error",
        extra={"path": request.url.path, "method": request.method},
    )
    return _make_json_response(
        request,
        status_code=500,
        code="server_error",
        message="Internal server error",
        headers=_request_id_header(request),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers on the FastAPI app.
    """
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
