"""
Authentication API routes.

Endpoints:
- POST /auth/registration -> register a user account (USER role, empty cart)
- POST /auth/login        -> exchange e-mail + password for a bearer token
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from bookstore.core.deps import get_auth_service
from bookstore.schemas.user import (
    UserLoginRequestDto,
    UserLoginResponseDto,
    UserRegistrationRequestDto,
    UserResponseDto,
)
from bookstore.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/registration", response_model=UserResponseDto, status_code=status.HTTP_201_CREATED)
def register(
    payload: UserRegistrationRequestDto,
    service: AuthService = Depends(get_auth_service),
) -> UserResponseDto:
    """
    Register a new user.
    """
    return service.register(payload)


@router.post("/login", response_model=UserLoginResponseDto)
def login(
    payload: UserLoginRequestDto,
    service: AuthService = Depends(get_auth_service),
) -> UserLoginResponseDto:
    """
    Authenticate and return a bearer token.
    """
    return service.authenticate(payload)
