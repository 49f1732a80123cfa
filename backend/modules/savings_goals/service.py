"""
Savings goals service implementation.

Completion is derived state: every write that touches either amount
re-evaluates ``is_completed``/``completed_at`` before it is stored.
"""

import logging
import math
from datetime import datetime
from typing import Any, Callable

from shared.database import utcnow

from .exceptions import DeadlineInPastError, SavingsGoalAccessDeniedError, SavingsGoalNotFoundError
from .interfaces import ISavingsGoalRepository, ISavingsGoalService
from .models import (
    DEFAULT_COLOR,
    DEFAULT_ICON,
    AddProgressRequest,
    CreateSavingsGoalRequest,
    GoalStats,
    GoalStatus,
    SavingsGoal,
    SavingsGoalView,
    UpdateSavingsGoalRequest,
)

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def completion_changes(
    current_amount: float,
    target_amount: float,
    was_completed: bool,
    now: datetime,
) -> dict[str, Any]:
    """Fields to write so completion matches the amounts."""
    reached = current_amount >= target_amount
    if reached and not was_completed:
        return {"is_completed": True, "completed_at": now}
    if not reached and was_completed:
        return {"is_completed": False, "completed_at": None}
    return {}


class SavingsGoalService(ISavingsGoalService):
    """Implementation of ISavingsGoalService."""

    def __init__(
        self,
        repository: ISavingsGoalRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._repository = repository
        self._clock = clock

    def _view(self, goal: SavingsGoal) -> SavingsGoalView:
        progress = min(goal.current_amount / goal.target_amount * 100, 100)
        seconds_left = (goal.deadline - self._clock()).total_seconds()
        return SavingsGoalView(
            **goal.model_dump(),
            progress=round(progress, 2),
            days_remaining=math.ceil(seconds_left / SECONDS_PER_DAY),
        )

    async def _get_owned(self, user_id: str, goal_id: str, action: str) -> SavingsGoal:
        goal = await self._repository.get_by_id(goal_id)
        if goal is None:
            raise SavingsGoalNotFoundError(goal_id)
        if goal.user_id != user_id:
            raise SavingsGoalAccessDeniedError(goal_id, user_id, action)
        return goal

    async def list_goals(self, user_id: str, status: GoalStatus = GoalStatus.ALL) -> list[SavingsGoalView]:
        completed = None
        if status == GoalStatus.ACTIVE:
            completed = False
        elif status == GoalStatus.COMPLETED:
            completed = True
        goals = await self._repository.list_for_user(user_id, completed)
        return [self._view(goal) for goal in goals]

    async def get_goal(self, user_id: str, goal_id: str) -> SavingsGoalView:
        return self._view(await self._get_owned(user_id, goal_id, "access"))

    async def create_goal(self, user_id: str, request: CreateSavingsGoalRequest) -> SavingsGoalView:
        now = self._clock()
        if request.deadline <= now:
            raise DeadlineInPastError()

        fields: dict[str, Any] = {
            "name": request.name.strip(),
            "target_amount": request.target_amount,
            "current_amount": request.current_amount,
            "deadline": request.deadline,
            "category": request.category.strip(),
            "color": request.color or DEFAULT_COLOR,
            "icon": request.icon or DEFAULT_ICON,
            "is_completed": False,
            "completed_at": None,
        }
        fields.update(
            completion_changes(request.current_amount, request.target_amount, False, now)
        )
        goal = await self._repository.create(user_id, fields)
        logger.info(f"Created savings goal {goal.id} for user {user_id}")
        return self._view(goal)

    async def update_goal(
        self, user_id: str, goal_id: str, request: UpdateSavingsGoalRequest
    ) -> SavingsGoalView:
        goal = await self._get_owned(user_id, goal_id, "update")
        now = self._clock()

        changes: dict[str, Any] = request.model_dump(exclude_none=True)
        if "deadline" in changes and changes["deadline"] <= now and not goal.is_completed:
            raise DeadlineInPastError()
        if not changes:
            return self._view(goal)

        changes.update(
            completion_changes(
                changes.get("current_amount", goal.current_amount),
                changes.get("target_amount", goal.target_amount),
                goal.is_completed,
                now,
            )
        )
        return self._view(await self._save(goal_id, changes))

    async def add_progress(
        self, user_id: str, goal_id: str, request: AddProgressRequest
    ) -> SavingsGoalView:
        goal = await self._get_owned(user_id, goal_id, "update")

        current_amount = round(goal.current_amount + request.amount, 2)
        changes: dict[str, Any] = {"current_amount": current_amount}
        changes.update(
            completion_changes(current_amount, goal.target_amount, goal.is_completed, self._clock())
        )
        updated = await self._save(goal_id, changes)
        if updated.is_completed and not goal.is_completed:
            logger.info(f"Savings goal {goal_id} completed")
        return self._view(updated)

    async def _save(self, goal_id: str, changes: dict[str, Any]) -> SavingsGoal:
        updated = await self._repository.update(goal_id, changes)
        if updated is None:
            raise SavingsGoalNotFoundError(goal_id)
        return updated

    async def delete_goal(self, user_id: str, goal_id: str) -> None:
        await self._get_owned(user_id, goal_id, "delete")
        await self._repository.delete(goal_id)

    async def get_stats(self, user_id: str) -> GoalStats:
        goals = await self._repository.list_for_user(user_id)
        completed = sum(1 for goal in goals if goal.is_completed)
        average_progress = (
            sum(goal.current_amount / goal.target_amount * 100 for goal in goals) / len(goals)
            if goals
            else 0
        )
        return GoalStats(
            total=len(goals),
            active=len(goals) - completed,
            completed=completed,
            total_target=round(sum(goal.target_amount for goal in goals), 2),
            total_saved=round(sum(goal.current_amount for goal in goals), 2),
            average_progress=round(average_progress, 2),
        )
