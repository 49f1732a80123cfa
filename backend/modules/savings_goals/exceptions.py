"""
Savings goals module exceptions.
"""

from shared.exceptions import AuthorizationError, NotFoundError, ValidationError


class SavingsGoalNotFoundError(NotFoundError):
    """Raised when a savings goal is not found."""

    def __init__(self, goal_id: str):
        super().__init__(
            "Savings goal not found",
            code="SAVINGS_GOAL_NOT_FOUND",
            details={"goal_id": goal_id},
        )


class SavingsGoalAccessDeniedError(AuthorizationError):
    """Raised when a user touches another user's goal."""

    def __init__(self, goal_id: str, user_id: str, action: str = "access"):
        super().__init__(
            f"Not authorized to {action} this goal",
            code="SAVINGS_GOAL_ACCESS_DENIED",
            details={"goal_id": goal_id, "user_id": user_id},
        )


class DeadlineInPastError(ValidationError):
    """Raised when a goal's deadline is not in the future."""

    def __init__(self):
        super().__init__("Deadline must be in the future", code="DEADLINE_IN_PAST")
