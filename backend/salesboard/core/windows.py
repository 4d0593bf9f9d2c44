# salesboard/core/windows.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from salesboard.core.config import settings


@dataclass(frozen=True)
class Window:
    """Half-open [start, end) range in UTC."""

    start: datetime
    end: datetime

    def bounds(self, column) -> tuple:
        """WHERE clauses keeping `column` inside the window."""
        return column >= self.start, column < self.end


@dataclass(frozen=True)
class MonthWindows:
    previous: Window
    current: Window


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def reporting_zone(name: str | None = None) -> ZoneInfo:
    return ZoneInfo(name or settings.REPORTING_TIMEZONE)


def _first_of_month(year: int, month: int, tz: ZoneInfo) -> datetime:
    # month may run one step outside 1..12
    if month < 1:
        year, month = year - 1, month + 12
    elif month > 12:
        year, month = year + 1, month - 12
    return datetime(year, month, 1, tzinfo=tz).astimezone(timezone.utc)


def month_windows(as_of: datetime | None = None, tz: ZoneInfo | None = None) -> MonthWindows:
    """
    Calendar month containing `as_of` and the month before it.

    Months are cut in the reporting timezone and returned as UTC bounds so
    they can be compared with `created_at` directly. Computed per call;
    callers pass the request time.
    """
    tz = tz or reporting_zone()
    as_of = as_of or utcnow()
    if as_of.tzinfo is None:
        as_of = as_of.replace(tzinfo=timezone.utc)
    local = as_of.astimezone(tz)
    year, month = local.year, local.month

    return MonthWindows(
        previous=Window(_first_of_month(year, month - 1, tz), _first_of_month(year, month, tz)),
        current=Window(_first_of_month(year, month, tz), _first_of_month(year, month + 1, tz)),
    )


def trailing_day(as_of: datetime | None = None) -> Window:
    as_of = as_of or utcnow()
    if as_of.tzinfo is None:
        as_of = as_of.replace(tzinfo=timezone.utc)
    as_of = as_of.astimezone(timezone.utc)
    return Window(as_of - timedelta(days=1), as_of)


# ---------------------------------------------------------
# Ratios
# ---------------------------------------------------------
def percent_change(prev: float, curr: float) -> float:
    """
    Month-over-month change in percent.

    prev == 0 has no defined ratio; growth from zero reports curr * 100
    (so 0 -> 5 reads as 500%) and 0 -> 0 reads as 0. Not capped.
    """
    if prev == 0:
        return float(curr * 100) if curr else 0.0
    return (curr - prev) / prev * 100


def change_direction(prev: float, curr: float) -> str:
    if curr > prev:
        return "increase"
    if curr < prev:
        return "decrease"
    return "unchanged"


def goal_progress(curr: float, goal: float) -> float:
    """Raw share of the monthly goal in percent; may exceed 100."""
    if not goal:
        return 0.0
    return curr / goal * 100


def capped(percent: float, cap: float = 100.0) -> float:
    """Display value for progress bars."""
    return min(percent, cap)
