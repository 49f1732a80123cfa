"""
Savings goals module.

Target amounts a user saves towards, with progress tracking and automatic
completion.

Public API:
- ISavingsGoalService / ISavingsGoalRepository: Interfaces
- SavingsGoal, SavingsGoalView, GoalStats, GoalStatus: Models
- Savings goal exceptions
"""

from .interfaces import ISavingsGoalRepository, ISavingsGoalService
from .models import GoalStats, GoalStatus, SavingsGoal, SavingsGoalView
from .exceptions import DeadlineInPastError, SavingsGoalAccessDeniedError, SavingsGoalNotFoundError

__all__ = [
    "ISavingsGoalService",
    "ISavingsGoalRepository",
    "SavingsGoal",
    "SavingsGoalView",
    "GoalStats",
    "GoalStatus",
    "SavingsGoalNotFoundError",
    "SavingsGoalAccessDeniedError",
    "DeadlineInPastError",
]
