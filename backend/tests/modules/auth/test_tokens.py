"""Tests for the identity token codec."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from modules.auth.exceptions import ExpiredTokenError, InvalidTokenError
from modules.auth.tokens import TokenCodec

SECRET = "test-secret-key-for-testing-only"
USER_ID = "65a1b2c3d4e5f60718293a4b"


class Clock:
    def __init__(self):
        self.current = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.current


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def codec(clock):
    return TokenCodec(SECRET, ttl=timedelta(days=30), clock=clock)


class TestTokenCodec:
    def test_round_trip(self, codec):
        """A freshly issued token verifies to its subject."""
        assert codec.verify(codec.issue(USER_ID)) == USER_ID

    def test_claims(self, codec, clock):
        """Tokens carry sub, iat, exp (iat + ttl) and a jti."""
        payload = codec.decode(codec.issue(USER_ID))
        assert payload.sub == USER_ID
        assert payload.iat == int(clock.current.timestamp())
        assert payload.exp == payload.iat + 30 * 24 * 60 * 60
        assert payload.jti

    def test_tokens_are_unique(self, codec):
        """Two tokens issued in the same second still differ."""
        assert codec.issue(USER_ID) != codec.issue(USER_ID)

    def test_valid_until_just_before_expiry(self, codec, clock):
        token = codec.issue(USER_ID)
        clock.current += timedelta(days=30, seconds=-1)
        assert codec.verify(token) == USER_ID

    def test_expired_at_exp(self, codec, clock):
        """A token is expired from its exp instant onwards."""
        token = codec.issue(USER_ID)
        clock.current += timedelta(days=30)
        with pytest.raises(ExpiredTokenError) as exc_info:
            codec.verify(token)
        assert exc_info.value.message == "Not authorized, token failed"
        assert exc_info.value.code == "TOKEN_EXPIRED"

    def test_wrong_secret(self, codec, clock):
        other = TokenCodec("another-secret", clock=clock)
        with pytest.raises(InvalidTokenError):
            codec.verify(other.issue(USER_ID))

    def test_tampered_token(self, codec):
        token = codec.issue(USER_ID)
        header, payload, signature = token.split(".")
        tampered = f"{header}.{payload}.{signature[:-2]}xx"
        with pytest.raises(InvalidTokenError):
            codec.verify(tampered)

    @pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b.c"])
    def test_malformed(self, codec, token):
        with pytest.raises(InvalidTokenError) as exc_info:
            codec.verify(token)
        assert exc_info.value.status_code == 401

    def test_rejects_other_algorithms(self, codec):
        """Tokens not signed with HS256 are refused."""
        token = jwt.encode({"sub": USER_ID, "iat": 0, "exp": 2**31}, SECRET, algorithm="HS512")
        with pytest.raises(InvalidTokenError):
            codec.verify(token)

    def test_missing_claims(self, codec):
        token = jwt.encode({"sub": USER_ID}, SECRET, algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            codec.verify(token)

    def test_empty_secret(self):
        with pytest.raises(ValueError):
            TokenCodec("")
