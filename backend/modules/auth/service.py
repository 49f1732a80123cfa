"""
Authentication service implementation.

Owns account lifecycle: registration, login, profile and password
changes, and password reset. Tokens come from TokenCodec; password hashes
from PasswordHasher, always computed before a record is written.
"""

import hashlib
import logging
import secrets
from datetime import datetime, timedelta
from typing import Any, Callable
from urllib.parse import urlencode

from shared.database import utcnow
from shared.exceptions import NotFoundError

from .exceptions import (
    EmailInUseError,
    IncorrectPasswordError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    UserAlreadyExistsError,
)
from .interfaces import IAuthService, INotificationSink, IUserRepository
from .models import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    UpdateProfileRequest,
    User,
)
from .passwords import PasswordHasher
from .tokens import TokenCodec

logger = logging.getLogger(__name__)


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Stateless with respect to sessions: login and register hand out a
    signed token and nothing is stored about it.
    """

    def __init__(
        self,
        users: IUserRepository,
        tokens: TokenCodec,
        hasher: PasswordHasher,
        notifier: INotificationSink,
        client_url: str = "http://localhost:5173",
        reset_ttl: timedelta = timedelta(hours=1),
        clock: Callable[[], datetime] = utcnow,
    ):
        self._users = users
        self._tokens = tokens
        self._hasher = hasher
        self._notifier = notifier
        self._client_url = client_url.rstrip("/")
        self._reset_ttl = reset_ttl
        self._clock = clock

    async def register(self, request: RegisterRequest) -> tuple[User, str]:
        if await self._users.get_by_email(request.email):
            raise UserAlreadyExistsError(request.email)

        password_hash = await self._hasher.hash(request.password)
        user = await self._users.create(request.email, password_hash, request.name)
        logger.info(f"Registered user {user.id}")
        return user, self._tokens.issue(user.id)

    async def login(self, request: LoginRequest) -> tuple[User, str]:
        user = await self._users.get_by_email(request.email)
        if user is None:
            raise InvalidCredentialsError()

        if not await self._hasher.verify(user.password_hash, request.password):
            logger.info(f"Failed login for user {user.id}")
            raise InvalidCredentialsError()

        return user, self._tokens.issue(user.id)

    async def get_user(self, user_id: str) -> User:
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found", code="USER_NOT_FOUND")
        return user

    async def update_profile(self, user_id: str, request: UpdateProfileRequest) -> User:
        user = await self.get_user(user_id)
        changes: dict[str, Any] = {}

        if request.name:
            changes["name"] = request.name.strip()
        if request.email and request.email.lower() != user.email:
            owner = await self._users.get_by_email(request.email)
            if owner is not None and owner.id != user.id:
                raise EmailInUseError(request.email)
            changes["email"] = request.email
        if request.language is not None:
            changes["language"] = request.language.value
        if request.currency is not None:
            changes["currency"] = request.currency.value

        if not changes:
            return user
        return await self._users.update(user_id, changes) or user

    async def change_password(self, user_id: str, request: ChangePasswordRequest) -> None:
        user = await self.get_user(user_id)
        if not await self._hasher.verify(user.password_hash, request.current_password):
            raise IncorrectPasswordError()

        password_hash = await self._hasher.hash(request.new_password)
        await self._users.update(user_id, {"password_hash": password_hash})
        logger.info(f"Password changed for user {user_id}")

    async def request_password_reset(self, request: ForgotPasswordRequest) -> None:
        user = await self._users.get_by_email(request.email)
        if user is None:
            # Same outcome as success to avoid account enumeration
            return

        token = secrets.token_hex(32)
        await self._users.update(
            user.id,
            {
                "password_reset_token_hash": hash_reset_token(token),
                "password_reset_expires": self._clock() + self._reset_ttl,
            },
        )
        reset_url = f"{self._client_url}/reset-password?{urlencode({'token': token})}"
        await self._notifier.send_password_reset(user.email, user.name, reset_url)

    async def reset_password(self, request: ResetPasswordRequest) -> None:
        user = await self._users.find_by_reset_token(
            hash_reset_token(request.token), self._clock()
        )
        if user is None:
            raise InvalidResetTokenError()

        password_hash = await self._hasher.hash(request.new_password)
        await self._users.update(
            user.id,
            {
                "password_hash": password_hash,
                "password_reset_token_hash": None,
                "password_reset_expires": None,
            },
        )
        logger.info(f"Password reset completed for user {user.id}")
