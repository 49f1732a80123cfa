"""Tests for shared/dates.py."""

from datetime import datetime, timezone

import pytest

from shared.dates import DateRange, month_key, month_range, months_ago, year_range


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


class TestMonthRange:
    def test_half_open(self):
        """A month range includes its first instant and excludes the next month's."""
        period = month_range("2024-02")
        assert period.start == utc(2024, 2, 1)
        assert period.end == utc(2024, 3, 1)
        assert period.contains(utc(2024, 2, 29, 23, 59))
        assert not period.contains(utc(2024, 3, 1))

    def test_december_rolls_over(self):
        assert month_range("2024-12").end == utc(2025, 1, 1)

    def test_rejects_bad_month(self):
        with pytest.raises(ValueError):
            month_range("2024-13")


class TestYearRange:
    def test_covers_year(self):
        period = year_range("2024")
        assert period.contains(utc(2024, 1, 1))
        assert period.contains(utc(2024, 12, 31, 23, 59))
        assert not period.contains(utc(2025, 1, 1))


class TestDateRange:
    def test_inclusive_end(self):
        """Caller-given ranges include their end instant."""
        period = DateRange(start=utc(2024, 1, 1), end=utc(2024, 1, 31), end_inclusive=True)
        assert period.contains(utc(2024, 1, 31))

    def test_open_ended(self):
        assert DateRange(start=utc(2024, 1, 1)).contains(utc(2099, 1, 1))
        assert not DateRange(start=utc(2024, 1, 1)).contains(utc(2023, 12, 31))


class TestMonthsAgo:
    def test_same_day(self):
        assert months_ago(utc(2025, 1, 15), 6) == utc(2024, 7, 15)

    def test_clamps_day(self):
        """Aug 31 minus six months lands on the last day of February."""
        assert months_ago(utc(2024, 8, 31), 6) == utc(2024, 2, 29)


def test_month_key():
    assert month_key(utc(2024, 3, 9)) == "2024-03"
