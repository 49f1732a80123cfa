"""
Password hashing.

Hashing is an explicit step callers run before building a stored record.
Argon2 is CPU-bound, so both hashing and verification run in a worker
thread to keep the event loop responsive.
"""

import asyncio
import logging
from typing import Optional

from argon2 import PasswordHasher as Argon2Hasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

logger = logging.getLogger(__name__)


class PasswordHasher:
    """Async wrapper around argon2-cffi's PasswordHasher."""

    def __init__(self, hasher: Optional[Argon2Hasher] = None) -> None:
        self._hasher = hasher or Argon2Hasher()

    async def hash(self, password: str) -> str:
        return await asyncio.to_thread(self._hasher.hash, password)

    async def verify(self, password_hash: str, password: str) -> bool:
        """Return True if ``password`` matches ``password_hash``."""
        try:
            return await asyncio.to_thread(self._hasher.verify, password_hash, password)
        except VerifyMismatchError:
            return False
        except (InvalidHashError, VerificationError):
            logger.warning("Stored password hash could not be verified")
            return False
