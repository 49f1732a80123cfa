"""
Transaction repository over the document store.
"""

from typing import Any, Optional

from shared.dates import DateRange
from shared.repository import BaseRepository

from .interfaces import ITransactionRepository
from .models import Transaction


class TransactionRepository(BaseRepository[Transaction], ITransactionRepository):
    """Stores transactions in the ``transactions`` collection."""

    collection_name = "transactions"
    model = Transaction

    async def list_for_user(
        self,
        user_id: str,
        period: Optional[DateRange] = None,
        category: Optional[str] = None,
        entry_type: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[Transaction]:
        def matches(document: dict[str, Any]) -> bool:
            if document["user_id"] != user_id:
                return False
            if category is not None and document["category"] != category:
                return False
            if entry_type is not None and document["type"] != entry_type:
                return False
            return period is None or period.contains(document["date"])

        documents = await self._collection.find(
            where=matches, sort_by="date", descending=True, limit=limit
        )
        return self._to_models(documents)

    async def count_in_category(self, user_id: str, category: str) -> int:
        return await self._collection.count(
            where=lambda d: d["user_id"] == user_id and d["category"] == category
        )

    async def create(self, user_id: str, fields: dict[str, Any]) -> Transaction:
        document = await self._collection.insert({**fields, "user_id": user_id})
        return self.model.model_validate(document)

    async def update(self, transaction_id: str, changes: dict[str, Any]) -> Optional[Transaction]:
        return self._to_model(await self._collection.update(transaction_id, changes))
