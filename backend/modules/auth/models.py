"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from shared.models import ApiModel, AuthenticatedUser


class Language(str, Enum):
    ES = "es"
    EN = "en"


class Currency(str, Enum):
    EUR = "EUR"
    USD = "USD"


class TokenPayload(BaseModel):
    """Decoded identity token claims."""

    sub: str = Field(..., description="Subject (user ID)")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")
    jti: Optional[str] = Field(None, description="Random token ID")


class User(BaseModel):
    """
    Stored user record.

    Includes credential material; never returned from the API directly.
    Use ``to_public()`` for responses and ``to_identity()`` for the
    request context.
    """

    id: str
    email: str
    name: str
    password_hash: str
    language: Language = Language.ES
    currency: Currency = Currency.EUR
    password_reset_token_hash: Optional[str] = None
    password_reset_expires: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"extra": "ignore"}

    def to_public(self, include_created_at: bool = False) -> "UserPublic":
        return UserPublic(
            id=self.id,
            email=self.email,
            name=self.name,
            language=self.language,
            currency=self.currency,
            created_at=self.created_at if include_created_at else None,
        )

    def to_identity(self) -> AuthenticatedUser:
        return AuthenticatedUser(id=self.id, email=self.email, name=self.name)


class UserPublic(ApiModel):
    """User fields safe to return to the client."""

    id: str
    email: str
    name: str
    language: Language
    currency: Currency
    created_at: Optional[datetime] = None


class RegisterRequest(ApiModel):
    email: str
    password: str
    name: str


class LoginRequest(ApiModel):
    email: str
    password: str


class UpdateProfileRequest(ApiModel):
    name: Optional[str] = None
    email: Optional[str] = None
    language: Optional[Language] = None
    currency: Optional[Currency] = None


class ChangePasswordRequest(ApiModel):
    current_password: str
    new_password: str


class ForgotPasswordRequest(ApiModel):
    email: str


class ResetPasswordRequest(ApiModel):
    token: str
    new_password: str


class AuthResponse(ApiModel):
    """Returned by register and login."""

    success: bool = True
    user: UserPublic
    token: str


class UserResponse(ApiModel):
    success: bool = True
    user: UserPublic
