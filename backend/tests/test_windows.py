from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from salesboard.core.points import RecordKind
from salesboard.core.windows import (
    Window,
    capped,
    change_direction,
    goal_progress,
    month_windows,
    percent_change,
    trailing_day,
)
from salesboard.crud.aggregates import list_in_window, window_total
from salesboard.models.meeting import Meeting

UTC = ZoneInfo("UTC")


def test_month_windows_mid_month():
    w = month_windows(datetime(2026, 10, 15, 12, 0, tzinfo=timezone.utc), tz=UTC)

    assert w.current.start == datetime(2026, 10, 1, tzinfo=timezone.utc)
    assert w.current.end == datetime(2026, 11, 1, tzinfo=timezone.utc)
    assert w.previous.start == datetime(2026, 9, 1, tzinfo=timezone.utc)
    assert w.previous.end == w.current.start


def test_month_windows_across_year_boundaries():
    january = month_windows(datetime(2026, 1, 3, tzinfo=timezone.utc), tz=UTC)
    assert january.previous.start == datetime(2025, 12, 1, tzinfo=timezone.utc)

    december = month_windows(datetime(2025, 12, 31, 23, 59, tzinfo=timezone.utc), tz=UTC)
    assert december.current.end == datetime(2026, 1, 1, tzinfo=timezone.utc)


def test_month_windows_cut_in_reporting_timezone():
    # 00:30 UTC on March 1st is already 01:30 in Stockholm
    w = month_windows(datetime(2026, 3, 1, 0, 30, tzinfo=timezone.utc), tz=ZoneInfo("Europe/Stockholm"))

    assert w.current.start == datetime(2026, 2, 28, 23, 0, tzinfo=timezone.utc)
    assert w.previous.end == w.current.start
    assert w.current.start <= datetime(2026, 3, 1, 0, 30, tzinfo=timezone.utc) < w.current.end


def test_naive_reference_time_is_treated_as_utc():
    w = month_windows(datetime(2026, 5, 31, 23, 0), tz=UTC)
    assert w.current.start == datetime(2026, 5, 1, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_window_is_half_open(db, make_profile):
    w = Window(datetime(2026, 1, 1, tzinfo=timezone.utc), datetime(2026, 2, 1, tzinfo=timezone.utc))
    seller = await make_profile()
    db.add_all([
        Meeting(name="start", date=date(2026, 1, 1), time="00:00", profile_id=seller.id, created_at=w.start),
        Meeting(name="end", date=date(2026, 2, 1), time="00:00", profile_id=seller.id, created_at=w.end),
    ])
    await db.commit()

    assert await window_total(db, RecordKind.MEETING, w) == 1
    assert [m.name for m in await list_in_window(db, RecordKind.MEETING, w)] == ["start"]


def test_trailing_day():
    as_of = datetime(2026, 10, 19, 7, 0, tzinfo=timezone.utc)
    w = trailing_day(as_of)

    assert w.start == datetime(2026, 10, 18, 7, 0, tzinfo=timezone.utc)
    assert w.end == as_of


@pytest.mark.parametrize(
    "prev, curr, expected",
    [
        (0, 0, 0),
        (0, 5, 500),
        (10, 20, 100),
        (20, 10, -50),
        (4, 4, 0),
    ],
)
def test_percent_change(prev, curr, expected):
    assert percent_change(prev, curr) == pytest.approx(expected)


def test_change_direction():
    assert change_direction(1, 2) == "increase"
    assert change_direction(2, 1) == "decrease"
    assert change_direction(0, 0) == "unchanged"


def test_goal_progress_is_uncapped_but_display_is():
    raw = goal_progress(28000, 14000)

    assert raw == pytest.approx(200)
    assert capped(raw) == 100
    assert goal_progress(3, 0) == 0
