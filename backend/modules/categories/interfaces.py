"""
Categories module interface.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import Category, CategoryStats, CreateCategoryRequest, UpdateCategoryRequest


@runtime_checkable
class ICategoryRepository(Protocol):
    """Storage operations for categories."""

    async def get_by_id(self, category_id: str) -> Optional[Category]:
        ...

    async def list_visible(self, user_id: str, entry_type: Optional[str] = None) -> list[Category]:
        """Defaults plus the user's own categories, defaults first, then by name."""
        ...

    async def find_visible_by_name(
        self,
        user_id: str,
        name: str,
        entry_type: str,
        exclude_id: Optional[str] = None,
    ) -> Optional[Category]:
        ...

    async def create(self, user_id: str, fields: dict[str, Any]) -> Category:
        ...

    async def update(self, category_id: str, changes: dict[str, Any]) -> Optional[Category]:
        ...

    async def delete(self, category_id: str) -> bool:
        ...

    async def seed_defaults(self, defaults: list[dict[str, Any]]) -> int:
        """Insert missing default categories. Returns how many were added."""
        ...


@runtime_checkable
class ICategoryService(Protocol):
    """
    Interface for category operations.

    Default categories are readable by everyone and writable by no one.
    """

    async def list_categories(self, user_id: str, entry_type: Optional[str] = None) -> list[Category]:
        ...

    async def get_category(self, user_id: str, category_id: str) -> Category:
        """
        Raises:
            CategoryNotFoundError: If no such category exists
            CategoryAccessDeniedError: If it is another user's custom category
        """
        ...

    async def create_category(self, user_id: str, request: CreateCategoryRequest) -> Category:
        """
        Raises:
            DuplicateCategoryError: If a visible category of that type has the name
        """
        ...

    async def update_category(
        self, user_id: str, category_id: str, request: UpdateCategoryRequest
    ) -> Category:
        ...

    async def delete_category(self, user_id: str, category_id: str) -> None:
        """
        Raises:
            CategoryInUseError: If the user's transactions still use it
        """
        ...

    async def get_stats(self, user_id: str) -> list[CategoryStats]:
        ...

    async def seed_defaults(self) -> int:
        ...
