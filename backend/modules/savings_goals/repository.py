"""
Savings goal repository over the document store.
"""

from typing import Any, Optional

from shared.repository import BaseRepository

from .interfaces import ISavingsGoalRepository
from .models import SavingsGoal


class SavingsGoalRepository(BaseRepository[SavingsGoal], ISavingsGoalRepository):
    """Stores goals in the ``savings_goals`` collection."""

    collection_name = "savings_goals"
    model = SavingsGoal

    async def list_for_user(self, user_id: str, completed: Optional[bool] = None) -> list[SavingsGoal]:
        documents = await self._collection.find(
            where=lambda d: d["user_id"] == user_id
            and (completed is None or d["is_completed"] == completed)
        )
        documents.sort(key=lambda d: (d["is_completed"], d["deadline"]))
        return self._to_models(documents)

    async def create(self, user_id: str, fields: dict[str, Any]) -> SavingsGoal:
        document = await self._collection.insert({**fields, "user_id": user_id})
        return self.model.model_validate(document)

    async def update(self, goal_id: str, changes: dict[str, Any]) -> Optional[SavingsGoal]:
        return self._to_model(await self._collection.update(goal_id, changes))
