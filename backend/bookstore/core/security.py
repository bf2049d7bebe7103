"""
Password hashing and JWT bearer tokens.

- hash_password / verify_password: passlib CryptContext (pbkdf2_sha256).
- JwtUtil: issues HS256 tokens whose subject is the user's e-mail and reads
  them back. Secret, algorithm and lifetime come from settings.

Usage:
    from bookstore.core.security import get_jwt_util
    token = get_jwt_util().generate_token("user@example.com")
    email = get_jwt_util().get_username(token)
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from bookstore.core.config import get_settings
from bookstore.core.errors import AuthError

__all__ = ["hash_password", "verify_password", "JwtUtil", "get_jwt_util"]

PWD_CTX = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(raw: str) -> str:
    """Return a salted hash for `raw`."""
    if not isinstance(raw, str) or not raw:
        raise ValueError("password must be a non-empty string")
    return PWD_CTX.hash(raw)


def verify_password(raw: str, hashed: str) -> bool:
    """Check `raw` against a stored hash. Unknown hash formats never verify."""
    if not raw or not hashed:
        return False
    try:
        return PWD_CTX.verify(raw, hashed)
    except ValueError:
        return False


class JwtUtil:
    """
    Issue and validate signed bearer tokens.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expiration: timedelta = timedelta(minutes=300)) -> None:
        if not secret:
            raise ValueError("secret must be a non-empty string")
        self.secret = secret
        self.algorithm = algorithm
        self.expiration = expiration

    def generate_token(self, username: str, *, now: Optional[datetime] = None) -> str:
        """
        Create a token for `username` (the user's e-mail).
        """
        issued = now or datetime.now(timezone.utc)
        payload = {
            "sub": username,
            "iat": int(issued.timestamp()),
            "exp": int((issued + self.expiration).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def _decode(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise AuthError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthError("Invalid token") from exc

    def is_valid_token(self, token: str) -> bool:
        try:
            self._decode(token)
        except AuthError:
            return False
        return True

    def get_username(self, token: str) -> str:
        """
        Return the subject of a valid token.

        Raises:
            AuthError: if the token is expired, tampered with or malformed.
        """
        subject = self._decode(token).get("sub")
        if not isinstance(subject, str) or not subject:
            raise AuthError("Invalid token payload")
        return subject


@lru_cache(maxsize=1)
def get_jwt_util() -> JwtUtil:
    """Return a JwtUtil configured from settings."""
    settings = get_settings()
    return JwtUtil(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expiration=timedelta(minutes=settings.jwt_expiration_minutes),
    )
