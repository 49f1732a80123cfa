"""
Identity token codec.

Issues and verifies HS256 JWTs carrying ``sub`` (user id), ``iat``,
``exp`` and a random ``jti``. The server keeps no token state: a token is
valid exactly when its signature matches the secret and the codec's clock
is before its expiry.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable
import jwt
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ExpiredTokenError, InvalidTokenError
from .models import TokenPayload

DEFAULT_TTL = timedelta(days=30)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenCodec:
    """
    Signs and verifies identity tokens with a server-held secret.

    Expiry is evaluated against the injected clock rather than PyJWT's
    wall-clock check, so tests can move time forward.
    """

    algorithm = "HS256"

    def __init__(self, secret: str, ttl: timedelta = DEFAULT_TTL, clock: Clock = _utcnow):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self._ttl = ttl
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, subject_id: str) -> str:
        """
        Create a signed token for a user.

        Args:
            subject_id: User ID to embed as ``sub``

        Returns:
            Encoded JWT string
        """
        issued_at = self._clock()
        payload = {
            "sub": subject_id,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._ttl).timestamp()),
            "jti": secrets.token_hex(8),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def decode(self, token: str) -> TokenPayload:
        """
        Verify a token and return its claims.

        Raises:
            InvalidTokenError: Bad signature, malformed token or missing claims
            ExpiredTokenError: Current time is at or past ``exp``
        """
        if not token:
            raise InvalidTokenError("empty token")

        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={
                    "require": ["sub", "iat", "exp"],
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
            payload = TokenPayload(**claims)
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e)) from e
        except PydanticValidationError as e:
            raise InvalidTokenError("malformed claims") from e

        if self._clock().timestamp() >= payload.exp:
            raise ExpiredTokenError()

        return payload

    def verify(self, token: str) -> str:
        """Verify a token and return its subject (user ID)."""
        return self.decode(token).sub
