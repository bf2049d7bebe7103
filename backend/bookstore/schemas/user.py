"""
User account DTOs: registration, login and the public user view.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, EmailStr, Field, model_validator

from bookstore.schemas.common import ORMBase

__all__ = [
    "UserRegistrationRequestDto",
    "UserResponseDto",
    "UserLoginRequestDto",
    "UserLoginResponseDto",
]


class UserRegistrationRequestDto(BaseModel):
    email: EmailStr = Field(..., examples=["john.doe@example.com"])
    password: str = Field(..., min_length=8, max_length=35)
    repeat_password: str = Field(..., min_length=8, max_length=35)
    first_name: str = Field(..., min_length=1, max_length=255, examples=["John"])
    last_name: str = Field(..., min_length=1, max_length=255, examples=["Doe"])
    shipping_address: Optional[str] = Field(default=None, max_length=512, examples=["221B Baker Street"])

    @model_validator(mode="after")
    def _passwords_match(self) -> "UserRegistrationRequestDto":
        if self.password != self.repeat_password:
            raise ValueError("password and repeat_password must match")
        return self


class UserResponseDto(ORMBase):
    id: int
    email: str
    first_name: str
    last_name: str
    shipping_address: Optional[str] = None


class UserLoginRequestDto(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=35)


class UserLoginResponseDto(BaseModel):
    token: str
