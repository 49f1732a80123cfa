"""
Categories module.

Default categories shared by all users plus per-user custom ones.

Public API:
- ICategoryService / ICategoryRepository: Interfaces
- Category, CategoryStats: Models
- DEFAULT_CATEGORIES: Seed data
- Category exceptions
"""

from .defaults import DEFAULT_CATEGORIES
from .interfaces import ICategoryRepository, ICategoryService
from .models import Category, CategoryStats
from .exceptions import (
    CategoryAccessDeniedError,
    CategoryInUseError,
    CategoryNotFoundError,
    DefaultCategoryError,
    DuplicateCategoryError,
)

__all__ = [
    "DEFAULT_CATEGORIES",
    "ICategoryService",
    "ICategoryRepository",
    "Category",
    "CategoryStats",
    "CategoryNotFoundError",
    "CategoryAccessDeniedError",
    "DefaultCategoryError",
    "DuplicateCategoryError",
    "CategoryInUseError",
]
