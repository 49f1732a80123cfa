"""
Transactions module data models.
"""

from datetime import datetime
from typing import Optional
from pydantic import Field

from shared.models import ApiModel, EntryType


class Transaction(ApiModel):
    """A single income or expense entry owned by one user."""

    id: str
    user_id: str
    type: EntryType
    amount: float = Field(..., gt=0)
    category: str
    description: str = ""
    date: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CreateTransactionRequest(ApiModel):
    type: EntryType
    amount: float
    category: str
    description: Optional[str] = None
    date: Optional[datetime] = None


class UpdateTransactionRequest(ApiModel):
    type: Optional[EntryType] = None
    amount: Optional[float] = None
    category: Optional[str] = None
    description: Optional[str] = None
    date: Optional[datetime] = None


class TransactionFilters(ApiModel):
    """
    List/summary filters.

    ``month`` is ``YYYY-MM`` and ``year`` is ``YYYY``. An explicit
    start/end range takes precedence over month, which takes precedence
    over year.
    """

    month: Optional[str] = None
    year: Optional[str] = None
    category: Optional[str] = None
    type: Optional[EntryType] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class CategoryTotal(ApiModel):
    category: str
    type: EntryType
    total: float
    count: int


class MonthlyTotal(ApiModel):
    month: str
    income: float = 0
    expenses: float = 0
    balance: float = 0


class TransactionSummary(ApiModel):
    total_income: float
    total_expenses: float
    balance: float
    by_category: list[CategoryTotal]
    by_month: list[MonthlyTotal]


class TransactionResponse(ApiModel):
    success: bool = True
    data: Transaction


class TransactionListResponse(ApiModel):
    success: bool = True
    count: int
    data: list[Transaction]


class TransactionSummaryResponse(ApiModel):
    success: bool = True
    summary: TransactionSummary
