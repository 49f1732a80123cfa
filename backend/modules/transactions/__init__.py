"""
Transactions module.

Income and expense entries owned by a user, with period filters and an
aggregate summary.

Public API:
- ITransactionService / ITransactionRepository: Interfaces
- Transaction, TransactionFilters, TransactionSummary: Models
- Transaction exceptions: TransactionNotFoundError, TransactionAccessDeniedError
"""

from .interfaces import ITransactionRepository, ITransactionService
from .models import (
    CreateTransactionRequest,
    Transaction,
    TransactionFilters,
    TransactionSummary,
    UpdateTransactionRequest,
)
from .exceptions import TransactionAccessDeniedError, TransactionNotFoundError

__all__ = [
    # Interfaces
    "ITransactionService",
    "ITransactionRepository",
    # Models
    "Transaction",
    "TransactionFilters",
    "TransactionSummary",
    "CreateTransactionRequest",
    "UpdateTransactionRequest",
    # Exceptions
    "TransactionNotFoundError",
    "TransactionAccessDeniedError",
]
