"""
Savings goals module interface.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import (
    AddProgressRequest,
    CreateSavingsGoalRequest,
    GoalStats,
    GoalStatus,
    SavingsGoal,
    SavingsGoalView,
    UpdateSavingsGoalRequest,
)


@runtime_checkable
class ISavingsGoalRepository(Protocol):
    """Storage operations for savings goals."""

    async def get_by_id(self, goal_id: str) -> Optional[SavingsGoal]:
        ...

    async def list_for_user(self, user_id: str, completed: Optional[bool] = None) -> list[SavingsGoal]:
        """Active goals first, then by nearest deadline."""
        ...

    async def create(self, user_id: str, fields: dict[str, Any]) -> SavingsGoal:
        ...

    async def update(self, goal_id: str, changes: dict[str, Any]) -> Optional[SavingsGoal]:
        ...

    async def delete(self, goal_id: str) -> bool:
        ...


@runtime_checkable
class ISavingsGoalService(Protocol):
    """Interface for savings goal operations, scoped to the calling user."""

    async def list_goals(self, user_id: str, status: GoalStatus = GoalStatus.ALL) -> list[SavingsGoalView]:
        ...

    async def get_goal(self, user_id: str, goal_id: str) -> SavingsGoalView:
        """
        Raises:
            SavingsGoalNotFoundError: If no such goal exists
            SavingsGoalAccessDeniedError: If it belongs to someone else
        """
        ...

    async def create_goal(self, user_id: str, request: CreateSavingsGoalRequest) -> SavingsGoalView:
        """
        Raises:
            DeadlineInPastError: If the deadline is not in the future
        """
        ...

    async def update_goal(
        self, user_id: str, goal_id: str, request: UpdateSavingsGoalRequest
    ) -> SavingsGoalView:
        ...

    async def add_progress(
        self, user_id: str, goal_id: str, request: AddProgressRequest
    ) -> SavingsGoalView:
        """Add to the saved amount, completing the goal when it reaches the target."""
        ...

    async def delete_goal(self, user_id: str, goal_id: str) -> None:
        ...

    async def get_stats(self, user_id: str) -> GoalStats:
        ...
