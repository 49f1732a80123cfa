"""
Savings goals module data models.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from shared.models import ApiModel

DEFAULT_COLOR = "#3b82f6"
DEFAULT_ICON = "target"


class GoalStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    ALL = "all"


class SavingsGoal(ApiModel):
    """
    A target amount the user is saving towards.

    ``is_completed`` tracks ``current_amount >= target_amount`` and is
    recomputed whenever either amount changes.
    """

    id: str
    user_id: str
    name: str
    target_amount: float
    current_amount: float = 0
    deadline: datetime
    category: str
    color: str = DEFAULT_COLOR
    icon: str = DEFAULT_ICON
    is_completed: bool = False
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SavingsGoalView(SavingsGoal):
    """Goal with derived progress fields for the client."""

    progress: float
    days_remaining: int


class CreateSavingsGoalRequest(ApiModel):
    name: str
    target_amount: float
    current_amount: float = 0
    deadline: datetime
    category: str
    color: Optional[str] = None
    icon: Optional[str] = None


class UpdateSavingsGoalRequest(ApiModel):
    name: Optional[str] = None
    target_amount: Optional[float] = None
    current_amount: Optional[float] = None
    deadline: Optional[datetime] = None
    category: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None


class AddProgressRequest(ApiModel):
    amount: float


class GoalStats(ApiModel):
    total: int
    active: int
    completed: int
    total_target: float
    total_saved: float
    average_progress: float


class SavingsGoalResponse(ApiModel):
    success: bool = True
    data: SavingsGoalView
    message: Optional[str] = None


class SavingsGoalListResponse(ApiModel):
    success: bool = True
    count: int
    data: list[SavingsGoalView]


class GoalStatsResponse(ApiModel):
    success: bool = True
    stats: GoalStats
