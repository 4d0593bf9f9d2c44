from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from salesboard.api.deps.records import get_month_windows
from salesboard.api.v1.auth import get_current_profile
from salesboard.core.points import RecordKind
from salesboard.core.windows import MonthWindows
from salesboard.crud.aggregates import highest_sale, leaderboard, month_totals
from salesboard.db.session import get_db
from salesboard.models.profile import Profile
from salesboard.schemas.dashboard import DashboardOut
from salesboard.schemas.profile import LeaderboardEntry
from salesboard.schemas.records import MonthTotals, SaleItem

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

TOP_PROFILES = 3


@router.get("", response_model=DashboardOut)
async def get_dashboard(
    windows: MonthWindows = Depends(get_month_windows),
    db: AsyncSession = Depends(get_db),
    _: Profile = Depends(get_current_profile),
):
    """
    Team-wide month-over-month totals, the month's biggest deal and the top 3.
    """
    totals = {}
    for field, kind in (
        ("meetings", RecordKind.MEETING),
        ("offers", RecordKind.OFFER),
        ("sales", RecordKind.SALE),
        ("bookings", RecordKind.BOOKING),
    ):
        prev, curr = await month_totals(db, kind, windows)
        totals[field] = MonthTotals.from_counts(prev, curr)

    top = await highest_sale(db, windows.current)
    profiles = await leaderboard(db, limit=TOP_PROFILES)

    return DashboardOut(
        window_start=windows.current.start,
        window_end=windows.current.end,
        highest_sale=SaleItem.model_validate(top) if top else None,
        top_profiles=[LeaderboardEntry.model_validate(p) for p in profiles],
        **totals,
    )
