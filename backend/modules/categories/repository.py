"""
Category repository over the document store.
"""

from typing import Any, Optional

from shared.repository import BaseRepository

from .interfaces import ICategoryRepository
from .models import Category


def _visible_to(user_id: str):
    return lambda d: d.get("is_default") or d.get("user_id") == user_id


class CategoryRepository(BaseRepository[Category], ICategoryRepository):
    """Stores categories in the ``categories`` collection."""

    collection_name = "categories"
    model = Category

    async def list_visible(self, user_id: str, entry_type: Optional[str] = None) -> list[Category]:
        visible = _visible_to(user_id)
        documents = await self._collection.find(
            where=lambda d: visible(d) and (entry_type is None or d["type"] == entry_type)
        )
        documents.sort(key=lambda d: (not d.get("is_default"), d["name"].lower()))
        return self._to_models(documents)

    async def find_visible_by_name(
        self,
        user_id: str,
        name: str,
        entry_type: str,
        exclude_id: Optional[str] = None,
    ) -> Optional[Category]:
        visible = _visible_to(user_id)
        documents = await self._collection.find(
            where=lambda d: visible(d)
            and d["name"] == name
            and d["type"] == entry_type
            and d["id"] != exclude_id,
            limit=1,
        )
        return self._to_model(documents[0]) if documents else None

    async def create(self, user_id: str, fields: dict[str, Any]) -> Category:
        document = await self._collection.insert(
            {**fields, "user_id": user_id, "is_default": False}
        )
        return self.model.model_validate(document)

    async def update(self, category_id: str, changes: dict[str, Any]) -> Optional[Category]:
        return self._to_model(await self._collection.update(category_id, changes))

    async def seed_defaults(self, defaults: list[dict[str, Any]]) -> int:
        added = 0
        for default in defaults:
            existing = await self._collection.find_one(
                name=default["name"], type=default["type"], is_default=True
            )
            if existing is None:
                await self._collection.insert({**default, "is_default": True, "user_id": None})
                added += 1
        return added
