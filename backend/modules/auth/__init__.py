"""
Authentication module.

Handles accounts, identity tokens, password hashing and password reset.

Public API:
- IAuthService / IUserRepository / INotificationSink: Interfaces
- TokenCodec: Issues and verifies identity tokens
- PasswordHasher: Async argon2 hashing
- User, UserPublic, TokenPayload: Models
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService, INotificationSink, IUserRepository
from .models import TokenPayload, User, UserPublic
from .passwords import PasswordHasher
from .tokens import TokenCodec
from .exceptions import (
    EmailInUseError,
    ExpiredTokenError,
    IncorrectPasswordError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    InvalidTokenError,
    MissingTokenError,
    UserAlreadyExistsError,
    UserNotFoundError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IUserRepository",
    "INotificationSink",
    # Components
    "TokenCodec",
    "PasswordHasher",
    # Models
    "User",
    "UserPublic",
    "TokenPayload",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "UserNotFoundError",
    "InvalidCredentialsError",
    "IncorrectPasswordError",
    "UserAlreadyExistsError",
    "EmailInUseError",
    "InvalidResetTokenError",
]
