"""
Categories service implementation.

Manages the default category set and users' custom categories. Deleting
a custom category is refused while any of the user's transactions
still reference it by name.
"""

import logging
from typing import Any, Optional

from modules.transactions.interfaces import ITransactionRepository

from .defaults import DEFAULT_CATEGORIES
from .exceptions import (
    CategoryAccessDeniedError,
    CategoryInUseError,
    CategoryNotFoundError,
    DefaultCategoryError,
    DuplicateCategoryError,
)
from .interfaces import ICategoryRepository, ICategoryService
from .models import (
    DEFAULT_COLOR,
    DEFAULT_ICON,
    Category,
    CategoryStats,
    CreateCategoryRequest,
    UpdateCategoryRequest,
)

logger = logging.getLogger(__name__)


class CategoryService(ICategoryService):
    """Implementation of ICategoryService."""

    def __init__(self, repository: ICategoryRepository, transactions: ITransactionRepository):
        self._repository = repository
        self._transactions = transactions

    async def list_categories(self, user_id: str, entry_type: Optional[str] = None) -> list[Category]:
        return await self._repository.list_visible(user_id, entry_type)

    async def get_category(self, user_id: str, category_id: str) -> Category:
        category = await self._repository.get_by_id(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        if not category.is_default and category.user_id != user_id:
            raise CategoryAccessDeniedError(category_id, user_id)
        return category

    async def _get_editable(self, user_id: str, category_id: str, action: str) -> Category:
        category = await self._repository.get_by_id(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        if category.is_default:
            raise DefaultCategoryError(category_id, "edit" if action == "update" else action)
        if category.user_id != user_id:
            raise CategoryAccessDeniedError(category_id, user_id, action)
        return category

    async def create_category(self, user_id: str, request: CreateCategoryRequest) -> Category:
        name = request.name.strip()
        entry_type = request.type.value
        if await self._repository.find_visible_by_name(user_id, name, entry_type):
            raise DuplicateCategoryError(name, entry_type)

        category = await self._repository.create(
            user_id,
            {
                "name": name,
                "type": entry_type,
                "icon": request.icon or DEFAULT_ICON,
                "color": request.color or DEFAULT_COLOR,
            },
        )
        logger.info(f"Created category {category.id} for user {user_id}")
        return category

    async def update_category(
        self, user_id: str, category_id: str, request: UpdateCategoryRequest
    ) -> Category:
        category = await self._get_editable(user_id, category_id, "update")

        changes: dict[str, Any] = request.model_dump(exclude_none=True)
        if "name" in changes:
            changes["name"] = changes["name"].strip()
            duplicate = await self._repository.find_visible_by_name(
                user_id, changes["name"], category.type.value, exclude_id=category.id
            )
            if duplicate:
                raise DuplicateCategoryError(changes["name"])
        if not changes:
            return category

        updated = await self._repository.update(category_id, changes)
        if updated is None:
            raise CategoryNotFoundError(category_id)
        return updated

    async def delete_category(self, user_id: str, category_id: str) -> None:
        category = await self._get_editable(user_id, category_id, "delete")

        in_use = await self._transactions.count_in_category(user_id, category.name)
        if in_use > 0:
            raise CategoryInUseError(category_id, in_use)

        await self._repository.delete(category_id)
        logger.info(f"Deleted category {category_id} for user {user_id}")

    async def get_stats(self, user_id: str) -> list[CategoryStats]:
        usage: dict[str, tuple[int, float]] = {}
        for transaction in await self._transactions.list_for_user(user_id):
            count, total = usage.get(transaction.category, (0, 0.0))
            usage[transaction.category] = (count + 1, total + transaction.amount)

        stats = []
        for category in await self._repository.list_visible(user_id):
            count, total = usage.get(category.name, (0, 0.0))
            stats.append(
                CategoryStats(
                    **category.model_dump(),
                    transaction_count=count,
                    total_amount=round(total, 2),
                )
            )
        return stats

    async def seed_defaults(self) -> int:
        added = await self._repository.seed_defaults(DEFAULT_CATEGORIES)
        if added:
            logger.info(f"Seeded {added} default categories")
        return added
