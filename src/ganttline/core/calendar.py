"""Pure calendar domain logic - no I/O dependencies."""

import calendar as _cal
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum

SPRINT_DAYS = 14


class InvalidConfig(ValueError):
    """Raised when a period start date cannot be parsed."""

    pass


class Period(Enum):
    """Viewing period that bounds the visible date range."""

    SPRINT = "sprint"
    MONTH = "month"
    QUARTER = "quarter"


@dataclass(frozen=True)
class CalendarConfig:
    """Selected period. Recreate it when the start or the kind changes."""

    period_start: date | str
    period_kind: Period = Period.SPRINT


def parse_date(value: date | str) -> date:
    """
    Parse a calendar date from a date object or an ISO string.

    Raises InvalidConfig for anything else.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip().split("T")[0])
        except ValueError as e:
            raise InvalidConfig(f"Invalid date: {value!r}") from e
    raise InvalidConfig(f"Invalid date: {value!r}")


def period_end(start: date, kind: Period) -> date:
    """Last date (inclusive) of the period beginning at start."""
    match kind:
        case Period.SPRINT:
            return start + timedelta(days=SPRINT_DAYS)
        case Period.MONTH:
            last = _cal.monthrange(start.year, start.month)[1]
            return start.replace(day=last)
        case Period.QUARTER:
            end_month = (start.month - 1) // 3 * 3 + 3
            last = _cal.monthrange(start.year, end_month)[1]
            return date(start.year, end_month, last)
    raise InvalidConfig(f"Unknown period: {kind!r}")


def date_range(config: CalendarConfig) -> list[date]:
    """
    Every date of the configured period, in order.

    Pure function - no I/O. Always contiguous and never empty.
    """
    start = parse_date(config.period_start)
    end = period_end(start, config.period_kind)
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def date_key(d: date) -> str:
    """Override key for a date (YYYY-MM-DD)."""
    return d.isoformat()


def is_weekend(d: date) -> bool:
    return d.weekday() >= 5


def is_non_working(d: date, overrides: frozenset[str] | set[str]) -> bool:
    """
    Check if a date is non-working.

    An override flips the default classification: weekends become working
    days and weekdays become non-working days.
    """
    return is_weekend(d) != (date_key(d) in overrides)


def toggle(d: date, overrides: frozenset[str] | set[str]) -> frozenset[str]:
    """Flip the override for one date. Applying it twice is a no-op."""
    return frozenset(overrides) ^ {date_key(d)}


def count_working_days(start: date, duration: int, overrides: frozenset[str] | set[str]) -> int:
    """Working days in the span [start, start + duration), ignoring any window."""
    return sum(
        1
        for i in range(duration)
        if not is_non_working(start + timedelta(days=i), overrides)
    )
