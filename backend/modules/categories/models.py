"""
Categories module data models.
"""

from datetime import datetime
from typing import Optional

from shared.models import ApiModel, EntryType

DEFAULT_ICON = "circle"
DEFAULT_COLOR = "#6366f1"


class Category(ApiModel):
    """
    A transaction category.

    Default categories have no owner and are visible to every user;
    custom ones belong to exactly one user.
    """

    id: str
    name: str
    type: EntryType
    icon: str = DEFAULT_ICON
    color: str = DEFAULT_COLOR
    is_default: bool = False
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CategoryStats(Category):
    """Category plus how the user's transactions use it."""

    transaction_count: int = 0
    total_amount: float = 0


class CreateCategoryRequest(ApiModel):
    name: str
    type: EntryType
    icon: Optional[str] = None
    color: Optional[str] = None


class UpdateCategoryRequest(ApiModel):
    name: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None


class CategoryResponse(ApiModel):
    success: bool = True
    data: Category


class CategoryListResponse(ApiModel):
    success: bool = True
    count: int
    data: list[Category]


class CategoryStatsResponse(ApiModel):
    success: bool = True
    data: list[CategoryStats]
