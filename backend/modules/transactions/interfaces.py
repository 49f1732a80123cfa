"""
Transactions module interface.

The API layer, the category module and the AI assistant depend on
ITransactionService / ITransactionRepository, not the implementations.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from shared.dates import DateRange

from .models import (
    CreateTransactionRequest,
    Transaction,
    TransactionFilters,
    TransactionSummary,
    UpdateTransactionRequest,
)


@runtime_checkable
class ITransactionRepository(Protocol):
    """Storage operations for transactions."""

    async def get_by_id(self, transaction_id: str) -> Optional[Transaction]:
        ...

    async def list_for_user(
        self,
        user_id: str,
        period: Optional[DateRange] = None,
        category: Optional[str] = None,
        entry_type: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[Transaction]:
        """Transactions matching the filters, newest first."""
        ...

    async def count_in_category(self, user_id: str, category: str) -> int:
        ...

    async def create(self, user_id: str, fields: dict[str, Any]) -> Transaction:
        ...

    async def update(self, transaction_id: str, changes: dict[str, Any]) -> Optional[Transaction]:
        ...

    async def delete(self, transaction_id: str) -> bool:
        ...


@runtime_checkable
class ITransactionService(Protocol):
    """
    Interface for transaction operations.

    Every method is scoped to the calling user; touching another user's
    transaction raises TransactionAccessDeniedError.
    """

    async def list_transactions(
        self, user_id: str, filters: TransactionFilters
    ) -> list[Transaction]:
        ...

    async def get_transaction(self, user_id: str, transaction_id: str) -> Transaction:
        """
        Raises:
            TransactionNotFoundError: If no such transaction exists
            TransactionAccessDeniedError: If it belongs to someone else
        """
        ...

    async def create_transaction(
        self, user_id: str, request: CreateTransactionRequest
    ) -> Transaction:
        ...

    async def update_transaction(
        self, user_id: str, transaction_id: str, request: UpdateTransactionRequest
    ) -> Transaction:
        ...

    async def delete_transaction(self, user_id: str, transaction_id: str) -> None:
        ...

    async def get_summary(self, user_id: str, filters: TransactionFilters) -> TransactionSummary:
        """
        Totals and per-category breakdown for the filtered period, plus
        per-month totals for the last six months.
        """
        ...
