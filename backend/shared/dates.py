"""
Date range helpers for period filters.

Periods are half-open UTC intervals ``[start, end)`` so consecutive
months never overlap.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


@dataclass(frozen=True)
class DateRange:
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    # True when ``end`` is an inclusive bound given by the caller
    end_inclusive: bool = False

    def contains(self, moment: datetime) -> bool:
        if self.start is not None and moment < self.start:
            return False
        if self.end is not None:
            if self.end_inclusive:
                return moment <= self.end
            return moment < self.end
        return True


def _add_months(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_range(value: str) -> DateRange:
    """Range covering a ``YYYY-MM`` month."""
    year, month = (int(part) for part in value.split("-"))
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {value}")
    next_year, next_month = _add_months(year, month, 1)
    return DateRange(
        start=datetime(year, month, 1, tzinfo=timezone.utc),
        end=datetime(next_year, next_month, 1, tzinfo=timezone.utc),
    )


def year_range(value: str) -> DateRange:
    """Range covering a ``YYYY`` year."""
    year = int(value)
    return DateRange(
        start=datetime(year, 1, 1, tzinfo=timezone.utc),
        end=datetime(year + 1, 1, 1, tzinfo=timezone.utc),
    )


def months_ago(moment: datetime, months: int) -> datetime:
    """Same day and time ``months`` earlier, clamped to the month's length."""
    year, month = _add_months(moment.year, moment.month, -months)
    next_year, next_month = _add_months(year, month, 1)
    last_day = (datetime(next_year, next_month, 1) - datetime(year, month, 1)).days
    return moment.replace(year=year, month=month, day=min(moment.day, last_day))


def month_key(moment: datetime) -> str:
    return f"{moment.year:04d}-{moment.month:02d}"
