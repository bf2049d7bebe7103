"""
Authentication service for user accounts.

Depends only on:
- UserRepo / RoleRepo / ShoppingCartRepo Protocols
- Core security utilities (password hashing, JwtUtil)

Behavior:
    register(request) -> UserResponseDto
    - Rejects an e-mail that is already taken (ConflictError)
    - Stores a password hash, grants the USER role, opens an empty cart

    authenticate(request) -> UserLoginResponseDto
    - Verifies e-mail + password and issues a bearer token
    - Raises AuthError otherwise

    user_from_token(token) -> User
    - Resolves the user a bearer token was issued for
"""

from __future__ import annotations

from bookstore.core.contracts import RoleRepo, ShoppingCartRepo, UserRepo
from bookstore.core.errors import AuthError, ConflictError
from bookstore.core.logging import get_logger
from bookstore.core.security import JwtUtil, hash_password, verify_password
from bookstore.models.role import Role, RoleName
from bookstore.models.user import User
from bookstore.schemas.user import (
    UserLoginRequestDto,
    UserLoginResponseDto,
    UserRegistrationRequestDto,
    UserResponseDto,
)

__all__ = ["AuthService"]

log = get_logger(__name__)


class AuthService:
    """
    Registration, login and token resolution.
    """

    def __init__(
        self,
        user_repo: UserRepo,
        role_repo: RoleRepo,
        cart_repo: ShoppingCartRepo,
        jwt_util: JwtUtil,
    ) -> None:
        self.user_repo = user_repo
        self.role_repo = role_repo
        self.cart_repo = cart_repo
        self.jwt_util = jwt_util

    def _default_role(self) -> Role:
        role = self.role_repo.find_by_name(RoleName.USER)
        return role if role is not None else self.role_repo.create(RoleName.USER)

    def register(self, request: UserRegistrationRequestDto) -> UserResponseDto:
        if self.user_repo.exists_by_email(request.email):
            raise ConflictError(f"Can't register user with email {request.email}")
        user = User(
            email=request.email,
            password=hash_password(request.password),
            first_name=request.first_name.strip(),
            last_name=request.last_name.strip(),
            shipping_address=request.shipping_address,
            roles=[self._default_role()],
        )
        try:
            user = self.user_repo.create(user)
        except ValueError as exc:
            raise ConflictError(str(exc)) from exc
        self.cart_repo.create_for_user(user.id)
        log.info("user_registered", extra={"user_id": user.id})
        return UserResponseDto.model_validate(user)

    def authenticate(self, request: UserLoginRequestDto) -> UserLoginResponseDto:
        user = self.user_repo.get_by_email(request.email)
        if user is None or not verify_password(request.password, user.password):
            log.warning("login_failed", extra={"email": request.email})
            raise AuthError("Invalid email or password")
        return UserLoginResponseDto(token=self.jwt_util.generate_token(user.email))

    def user_from_token(self, token: str) -> User:
        """
        Raises:
            AuthError: if the token is invalid or its user no longer exists.
        """
        email = self.jwt_util.get_username(token)
        user = self.user_repo.get_by_email(email)
        if user is None:
            raise AuthError("User not found")
        return user
