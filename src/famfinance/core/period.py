#!/usr/bin/env python3
"""
Period Primitive Type

Immutable inclusive date range used to scope every aggregation query.
Provides named constructors for calendar months, quarters and year-to-date,
plus helpers to split a range into calendar sub-periods.
"""

import calendar
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum

from .exceptions import InvalidPeriod


class Granularity(Enum):
    """Sub-period sizes used for series and breakdowns."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


def beginning_of_month(day: date) -> date:
    """First day of the month containing day."""
    return day.replace(day=1)


def end_of_month(day: date) -> date:
    """Last day of the month containing day."""
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def next_month(day: date) -> date:
    """First day of the month after the one containing day."""
    return end_of_month(day) + timedelta(days=1)


def add_months(day: date, months: int) -> date:
    """
    First day of the month that is `months` away from day's month.

    Example:
        add_months(date(2024, 11, 20), 3) -> date(2025, 2, 1)
    """
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def beginning_of_quarter(day: date) -> date:
    """First day of the calendar quarter containing day."""
    first_month = 3 * ((day.month - 1) // 3) + 1
    return date(day.year, first_month, 1)


def end_of_quarter(day: date) -> date:
    """Last day of the calendar quarter containing day."""
    return end_of_month(add_months(beginning_of_quarter(day), 2))


class DateRange:
    """
    Lazy, restartable sequence of every date in an inclusive range.

    Each iteration starts over from the first day; nothing is materialized.
    """

    def __init__(self, start_date: date, end_date: date):
        self.start_date = start_date
        self.end_date = end_date

    def __iter__(self) -> Iterator[date]:
        current = self.start_date
        while current <= self.end_date:
            yield current
            current += timedelta(days=1)

    def __len__(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.start_date <= day <= self.end_date

    def __repr__(self) -> str:
        return f"DateRange({self.start_date!r}, {self.end_date!r})"


@dataclass(frozen=True)
class Period:
    """
    Inclusive calendar date range.

    Examples:
        >>> Period.month_of(date(2024, 2, 10))
        Period(start_date=datetime.date(2024, 2, 1), end_date=datetime.date(2024, 2, 29))

        >>> [p.label() for p in Period.custom(date(2024, 1, 15), date(2024, 3, 3)).months()]
        ['Jan 2024', 'Feb 2024', 'Mar 2024']
    """

    start_date: date
    end_date: date

    def __post_init__(self) -> None:
        if self.start_date > self.end_date:
            raise InvalidPeriod(f"Period end {self.end_date} is before start {self.start_date}")

    @classmethod
    def custom(cls, start_date: date, end_date: date) -> "Period":
        """Create a period from explicit bounds."""
        return cls(start_date=start_date, end_date=end_date)

    @classmethod
    def month_of(cls, day: date) -> "Period":
        """The full calendar month containing day."""
        return cls(start_date=beginning_of_month(day), end_date=end_of_month(day))

    @classmethod
    def quarter_of(cls, day: date) -> "Period":
        """The full calendar quarter containing day."""
        return cls(start_date=beginning_of_quarter(day), end_date=end_of_quarter(day))

    @classmethod
    def year_to_date(cls, day: date) -> "Period":
        """January 1st of day's year through day."""
        return cls(start_date=date(day.year, 1, 1), end_date=day)

    @classmethod
    def trailing_months(cls, months: int, as_of: date) -> "Period":
        """
        The `months` whole months before as_of's month, plus that month.

        Example:
            Period.trailing_months(6, date(2024, 7, 12)) covers 2024-01-01..2024-07-31
        """
        if months < 0:
            raise InvalidPeriod(f"Month count must be non-negative, got {months}")
        return cls(start_date=add_months(as_of, -months), end_date=end_of_month(as_of))

    @classmethod
    def for_type(cls, period_type: str, as_of: date) -> "Period":
        """
        Resolve an overview period type relative to as_of.

        Supported types: "monthly", "quarterly", "ytd". Anything else is monthly.
        """
        if period_type == "quarterly":
            return cls.quarter_of(as_of)
        if period_type == "ytd":
            return cls.year_to_date(as_of)
        return cls.month_of(as_of)

    def date_range(self) -> DateRange:
        """Every date in the period, lazily."""
        return DateRange(self.start_date, self.end_date)

    def contains(self, day: date) -> bool:
        """Check whether day falls within the period."""
        return self.start_date <= day <= self.end_date

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.contains(day)

    @property
    def days(self) -> int:
        """Number of days in the period."""
        return (self.end_date - self.start_date).days + 1

    def is_single_month(self) -> bool:
        return (self.start_date.year, self.start_date.month) == (self.end_date.year, self.end_date.month)

    def intersect(self, other: "Period") -> "Period | None":
        """Overlap of two periods, or None when they are disjoint."""
        start = max(self.start_date, other.start_date)
        end = min(self.end_date, other.end_date)
        if start > end:
            return None
        return Period(start_date=start, end_date=end)

    def months(self) -> list["Period"]:
        """
        One sub-period per calendar month, clipped to this period.

        A period inside a single month yields just itself.
        """
        return self._split(Granularity.MONTHLY)

    def quarters(self) -> list["Period"]:
        """One sub-period per calendar quarter, clipped to this period."""
        return self._split(Granularity.QUARTERLY)

    def years(self) -> list["Period"]:
        """One sub-period per calendar year, clipped to this period."""
        return self._split(Granularity.YEARLY)

    def subdivide(self, granularity: Granularity | str) -> list["Period"]:
        """Split into calendar sub-periods of the given granularity."""
        return self._split(Granularity(granularity))

    def _split(self, granularity: Granularity) -> list["Period"]:
        step = {Granularity.MONTHLY: 1, Granularity.QUARTERLY: 3, Granularity.YEARLY: 12}[granularity]

        if granularity == Granularity.QUARTERLY:
            cursor = beginning_of_quarter(self.start_date)
        elif granularity == Granularity.YEARLY:
            cursor = date(self.start_date.year, 1, 1)
        else:
            cursor = beginning_of_month(self.start_date)

        periods: list[Period] = []
        while cursor <= self.end_date:
            following = add_months(cursor, step)
            chunk = Period(start_date=cursor, end_date=following - timedelta(days=1))
            overlap = self.intersect(chunk)
            if overlap is not None:
                periods.append(overlap)
            cursor = following
        return periods

    def label(self) -> str:
        """Short display label of the starting month, e.g. 'Mar 2024'."""
        return self.start_date.strftime("%b %Y")

    def __str__(self) -> str:
        return f"{self.start_date.isoformat()}..{self.end_date.isoformat()}"
