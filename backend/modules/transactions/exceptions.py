"""
Transactions module exceptions.
"""

from shared.exceptions import AuthorizationError, NotFoundError


class TransactionNotFoundError(NotFoundError):
    """Raised when a transaction is not found."""

    def __init__(self, transaction_id: str):
        super().__init__(
            "Transaction not found",
            code="TRANSACTION_NOT_FOUND",
            details={"transaction_id": transaction_id},
        )


class TransactionAccessDeniedError(AuthorizationError):
    """Raised when a user touches another user's transaction."""

    def __init__(self, transaction_id: str, user_id: str, action: str = "access"):
        super().__init__(
            f"Not authorized to {action} this transaction",
            code="TRANSACTION_ACCESS_DENIED",
            details={"transaction_id": transaction_id, "user_id": user_id},
        )
