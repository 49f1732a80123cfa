"""
Authentication module interfaces.

Other modules should depend on IAuthService, not the concrete implementation.
The service itself depends on IUserRepository and INotificationSink, which
keeps persistence and email delivery swappable.
"""

from datetime import datetime
from typing import Any, Optional, Protocol, runtime_checkable

from shared.models import AuthenticatedUser

from .models import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    UpdateProfileRequest,
    User,
)


@runtime_checkable
class IUserRepository(Protocol):
    """Storage operations for user records."""

    async def get_by_id(self, user_id: str) -> Optional[User]:
        ...

    async def get_by_email(self, email: str) -> Optional[User]:
        ...

    async def get_identity(self, user_id: str) -> Optional[AuthenticatedUser]:
        """Look up a user without credential fields."""
        ...

    async def create(self, email: str, password_hash: str, name: str) -> User:
        ...

    async def update(self, user_id: str, changes: dict[str, Any]) -> Optional[User]:
        ...

    async def find_by_reset_token(self, token_hash: str, now: datetime) -> Optional[User]:
        """Find the user holding an unexpired reset token with this hash."""
        ...


@runtime_checkable
class INotificationSink(Protocol):
    """Outgoing account notifications."""

    async def send_password_reset(self, to: str, name: str, reset_url: str) -> None:
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for account operations.

    This protocol defines the contract that the auth module exposes
    to the API layer. Implementations must provide all these methods.
    """

    async def register(self, request: RegisterRequest) -> tuple[User, str]:
        """
        Create an account and issue a token.

        Raises:
            UserAlreadyExistsError: If the email is taken
        """
        ...

    async def login(self, request: LoginRequest) -> tuple[User, str]:
        """
        Check credentials and issue a token.

        Raises:
            InvalidCredentialsError: If email or password is wrong
        """
        ...

    async def get_user(self, user_id: str) -> User:
        """
        Raises:
            NotFoundError: If the user doesn't exist
        """
        ...

    async def update_profile(self, user_id: str, request: UpdateProfileRequest) -> User:
        ...

    async def change_password(self, user_id: str, request: ChangePasswordRequest) -> None:
        ...

    async def request_password_reset(self, request: ForgotPasswordRequest) -> None:
        """Send a reset link if the email exists; silent otherwise."""
        ...

    async def reset_password(self, request: ResetPasswordRequest) -> None:
        ...
