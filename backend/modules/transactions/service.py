"""
Transactions service implementation.

CRUD over a user's income/expense entries plus the aggregate summary the
dashboard is built from.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Optional

from shared.database import utcnow
from shared.dates import DateRange, month_key, month_range, months_ago, year_range
from shared.models import EntryType

from .exceptions import TransactionAccessDeniedError, TransactionNotFoundError
from .interfaces import ITransactionRepository, ITransactionService
from .models import (
    CategoryTotal,
    CreateTransactionRequest,
    MonthlyTotal,
    Transaction,
    TransactionFilters,
    TransactionSummary,
    UpdateTransactionRequest,
)

logger = logging.getLogger(__name__)

SUMMARY_MONTHS = 6


def period_from_filters(filters: TransactionFilters) -> Optional[DateRange]:
    """Resolve the date window a set of filters selects, if any."""
    if filters.start_date or filters.end_date:
        return DateRange(start=filters.start_date, end=filters.end_date, end_inclusive=True)
    if filters.month:
        return month_range(filters.month)
    if filters.year:
        return year_range(filters.year)
    return None


def _money(value: float) -> float:
    return round(value, 2)


class TransactionService(ITransactionService):
    """Implementation of ITransactionService over an ITransactionRepository."""

    def __init__(
        self,
        repository: ITransactionRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._repository = repository
        self._clock = clock

    async def list_transactions(
        self, user_id: str, filters: TransactionFilters
    ) -> list[Transaction]:
        return await self._repository.list_for_user(
            user_id,
            period=period_from_filters(filters),
            category=filters.category,
            entry_type=filters.type.value if filters.type else None,
        )

    async def _get_owned(self, user_id: str, transaction_id: str, action: str) -> Transaction:
        transaction = await self._repository.get_by_id(transaction_id)
        if transaction is None:
            raise TransactionNotFoundError(transaction_id)
        if transaction.user_id != user_id:
            raise TransactionAccessDeniedError(transaction_id, user_id, action)
        return transaction

    async def get_transaction(self, user_id: str, transaction_id: str) -> Transaction:
        return await self._get_owned(user_id, transaction_id, "access")

    async def create_transaction(
        self, user_id: str, request: CreateTransactionRequest
    ) -> Transaction:
        transaction = await self._repository.create(
            user_id,
            {
                "type": request.type.value,
                "amount": request.amount,
                "category": request.category.strip(),
                "description": (request.description or "").strip(),
                "date": request.date or self._clock(),
            },
        )
        logger.info(f"Created transaction {transaction.id} for user {user_id}")
        return transaction

    async def update_transaction(
        self, user_id: str, transaction_id: str, request: UpdateTransactionRequest
    ) -> Transaction:
        transaction = await self._get_owned(user_id, transaction_id, "update")

        changes: dict[str, Any] = request.model_dump(exclude_none=True)
        if "type" in changes:
            changes["type"] = request.type.value
        if not changes:
            return transaction

        updated = await self._repository.update(transaction_id, changes)
        if updated is None:
            raise TransactionNotFoundError(transaction_id)
        return updated

    async def delete_transaction(self, user_id: str, transaction_id: str) -> None:
        await self._get_owned(user_id, transaction_id, "delete")
        await self._repository.delete(transaction_id)
        logger.info(f"Deleted transaction {transaction_id} for user {user_id}")

    async def get_summary(self, user_id: str, filters: TransactionFilters) -> TransactionSummary:
        in_period = await self._repository.list_for_user(
            user_id, period=period_from_filters(filters)
        )

        total_income = sum(t.amount for t in in_period if t.type == EntryType.INCOME)
        total_expenses = sum(t.amount for t in in_period if t.type == EntryType.EXPENSE)

        groups: dict[tuple[str, EntryType], CategoryTotal] = {}
        for t in in_period:
            group = groups.setdefault(
                (t.category, t.type),
                CategoryTotal(category=t.category, type=t.type, total=0, count=0),
            )
            group.total = _money(group.total + t.amount)
            group.count += 1
        by_category = sorted(groups.values(), key=lambda g: g.total, reverse=True)

        return TransactionSummary(
            total_income=_money(total_income),
            total_expenses=_money(total_expenses),
            balance=_money(total_income - total_expenses),
            by_category=by_category,
            by_month=await self._monthly_totals(user_id),
        )

    async def _monthly_totals(self, user_id: str) -> list[MonthlyTotal]:
        since = months_ago(self._clock(), SUMMARY_MONTHS)
        recent = await self._repository.list_for_user(user_id, period=DateRange(start=since))

        months: dict[str, MonthlyTotal] = {}
        for t in recent:
            key = month_key(t.date)
            entry = months.setdefault(key, MonthlyTotal(month=key))
            if t.type == EntryType.INCOME:
                entry.income = _money(entry.income + t.amount)
            else:
                entry.expenses = _money(entry.expenses + t.amount)
            entry.balance = _money(entry.income - entry.expenses)

        return [months[key] for key in sorted(months)]
