"""Tests for the auth service."""

from datetime import datetime, timedelta, timezone
from urllib.parse import parse_qs, urlparse

import pytest
from argon2 import PasswordHasher as Argon2Hasher

from modules.auth.exceptions import (
    EmailInUseError,
    IncorrectPasswordError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    UserAlreadyExistsError,
)
from modules.auth.models import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    Language,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    UpdateProfileRequest,
)
from modules.auth.passwords import PasswordHasher
from modules.auth.repository import UserRepository
from modules.auth.service import AuthService
from modules.auth.tokens import TokenCodec
from shared.database import DocumentStore


class Clock:
    def __init__(self):
        self.current = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.current


class RecordingSink:
    """Notification sink that keeps what it was asked to send."""

    def __init__(self):
        self.sent: list[tuple[str, str, str]] = []

    async def send_password_reset(self, to: str, name: str, reset_url: str) -> None:
        self.sent.append((to, name, reset_url))

    @property
    def last_token(self) -> str:
        return parse_qs(urlparse(self.sent[-1][2]).query)["token"][0]


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def users():
    return UserRepository(DocumentStore())


@pytest.fixture
def tokens(clock):
    return TokenCodec("test-secret", clock=clock)


@pytest.fixture
def service(users, tokens, sink, clock):
    return AuthService(
        users=users,
        tokens=tokens,
        hasher=PasswordHasher(Argon2Hasher(time_cost=1, memory_cost=8, parallelism=1)),
        notifier=sink,
        client_url="https://app.example.com/",
        reset_ttl=timedelta(hours=1),
        clock=clock,
    )


async def register(service, email="ana@example.com", password="secret123", name="Ana"):
    return await service.register(RegisterRequest(email=email, password=password, name=name))


class TestRegister:
    @pytest.mark.asyncio
    async def test_creates_user_and_token(self, service, tokens):
        """Register should store the user and return a token for them."""
        user, token = await register(service)
        assert user.email == "ana@example.com"
        assert user.language == Language.ES
        assert tokens.verify(token) == user.id

    @pytest.mark.asyncio
    async def test_stores_hash_not_password(self, service, users):
        user, _ = await register(service)
        stored = await users.get_by_id(user.id)
        assert stored.password_hash != "secret123"
        assert stored.password_hash.startswith("$argon2")

    @pytest.mark.asyncio
    async def test_duplicate_email(self, service):
        """Emails are unique regardless of case."""
        await register(service)
        with pytest.raises(UserAlreadyExistsError) as exc_info:
            await register(service, email="ANA@example.com")
        assert exc_info.value.message == "User already exists with this email"
        assert exc_info.value.status_code == 400


class TestLogin:
    @pytest.mark.asyncio
    async def test_success(self, service, tokens):
        user, _ = await register(service)
        logged_in, token = await service.login(
            LoginRequest(email="ana@example.com", password="secret123")
        )
        assert logged_in.id == user.id
        assert tokens.verify(token) == user.id

    @pytest.mark.asyncio
    async def test_wrong_password(self, service):
        await register(service)
        with pytest.raises(InvalidCredentialsError):
            await service.login(LoginRequest(email="ana@example.com", password="nope"))

    @pytest.mark.asyncio
    async def test_unknown_email(self, service):
        """Unknown email gets the same error as a wrong password."""
        with pytest.raises(InvalidCredentialsError) as exc_info:
            await service.login(LoginRequest(email="who@example.com", password="x"))
        assert exc_info.value.message == "Invalid credentials"


class TestProfile:
    @pytest.mark.asyncio
    async def test_update_fields(self, service):
        user, _ = await register(service)
        updated = await service.update_profile(
            user.id, UpdateProfileRequest(name="Ana María", language=Language.EN)
        )
        assert updated.name == "Ana María"
        assert updated.language == Language.EN
        assert updated.email == "ana@example.com"

    @pytest.mark.asyncio
    async def test_email_in_use(self, service):
        user, _ = await register(service)
        await register(service, email="bo@example.com", name="Bo")
        with pytest.raises(EmailInUseError):
            await service.update_profile(user.id, UpdateProfileRequest(email="bo@example.com"))

    @pytest.mark.asyncio
    async def test_empty_update_returns_user(self, service):
        user, _ = await register(service)
        assert (await service.update_profile(user.id, UpdateProfileRequest())).id == user.id


class TestChangePassword:
    @pytest.mark.asyncio
    async def test_changes_password(self, service):
        user, _ = await register(service)
        await service.change_password(
            user.id, ChangePasswordRequest(current_password="secret123", new_password="newpass1")
        )
        await service.login(LoginRequest(email="ana@example.com", password="newpass1"))

    @pytest.mark.asyncio
    async def test_wrong_current_password(self, service):
        user, _ = await register(service)
        with pytest.raises(IncorrectPasswordError):
            await service.change_password(
                user.id, ChangePasswordRequest(current_password="bad", new_password="newpass1")
            )


class TestPasswordReset:
    @pytest.mark.asyncio
    async def test_full_flow(self, service, sink):
        """A reset link's token sets a new password exactly once."""
        await register(service)
        await service.request_password_reset(ForgotPasswordRequest(email="ana@example.com"))

        to, name, url = sink.sent[-1]
        assert (to, name) == ("ana@example.com", "Ana")
        assert url.startswith("https://app.example.com/reset-password?token=")

        token = sink.last_token
        await service.reset_password(ResetPasswordRequest(token=token, new_password="brandnew"))
        await service.login(LoginRequest(email="ana@example.com", password="brandnew"))

        with pytest.raises(InvalidResetTokenError):
            await service.reset_password(ResetPasswordRequest(token=token, new_password="again1"))

    @pytest.mark.asyncio
    async def test_stores_only_token_hash(self, service, sink, users):
        user, _ = await register(service)
        await service.request_password_reset(ForgotPasswordRequest(email="ana@example.com"))
        stored = await users.get_by_id(user.id)
        assert stored.password_reset_token_hash
        assert stored.password_reset_token_hash != sink.last_token

    @pytest.mark.asyncio
    async def test_unknown_email_is_silent(self, service, sink):
        await service.request_password_reset(ForgotPasswordRequest(email="who@example.com"))
        assert sink.sent == []

    @pytest.mark.asyncio
    async def test_expired_token(self, service, sink, clock):
        await register(service)
        await service.request_password_reset(ForgotPasswordRequest(email="ana@example.com"))
        clock.current += timedelta(hours=1, seconds=1)

        with pytest.raises(InvalidResetTokenError) as exc_info:
            await service.reset_password(
                ResetPasswordRequest(token=sink.last_token, new_password="brandnew")
            )
        assert exc_info.value.message == "Invalid or expired reset token"
