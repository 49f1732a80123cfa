"""
User repository over the document store.
"""

from datetime import datetime
from typing import Any, Optional

from shared.models import AuthenticatedUser
from shared.repository import BaseRepository

from .exceptions import UserAlreadyExistsError
from .interfaces import IUserRepository
from .models import User


class UserRepository(BaseRepository[User], IUserRepository):
    """Stores users in the ``users`` collection. Emails are kept lowercased."""

    collection_name = "users"
    model = User

    async def get_by_email(self, email: str) -> Optional[User]:
        return self._to_model(await self._collection.find_one(email=email.strip().lower()))

    async def get_identity(self, user_id: str) -> Optional[AuthenticatedUser]:
        user = await self.get_by_id(user_id)
        return user.to_identity() if user else None

    async def create(self, email: str, password_hash: str, name: str) -> User:
        email = email.strip().lower()
        # Checked here as well as in the service: hashing awaits in between.
        if await self._collection.find_one(email=email):
            raise UserAlreadyExistsError(email)
        document = await self._collection.insert(
            {
                "email": email,
                "password_hash": password_hash,
                "name": name.strip(),
                "language": "es",
                "currency": "EUR",
            }
        )
        return self.model.model_validate(document)

    async def update(self, user_id: str, changes: dict[str, Any]) -> Optional[User]:
        if "email" in changes:
            changes = {**changes, "email": changes["email"].strip().lower()}
        return self._to_model(await self._collection.update(user_id, changes))

    async def find_by_reset_token(self, token_hash: str, now: datetime) -> Optional[User]:
        documents = await self._collection.find(
            where=lambda d: d.get("password_reset_token_hash") == token_hash
            and d.get("password_reset_expires") is not None
            and d["password_reset_expires"] > now,
            limit=1,
        )
        return self._to_model(documents[0]) if documents else None
