# salesboard/crud/aggregates.py
"""
Monthly aggregate queries.

All windows filter on `created_at` (when the row was logged), never on the
user-editable `date`.
"""
from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from salesboard.core.points import RecordKind
from salesboard.core.windows import MonthWindows, Window
from salesboard.crud.records import RECORD_MODELS, record_options
from salesboard.models.offer import Offer
from salesboard.models.profile import Profile
from salesboard.models.sale import Sale


def _measure(kind: RecordKind):
    """Meetings/bookings count rows, offers sum `amount`, sales sum `revenue`."""
    if kind is RecordKind.OFFER:
        return func.coalesce(func.sum(Offer.amount), 0)
    if kind is RecordKind.SALE:
        return func.coalesce(func.sum(Sale.revenue), 0)
    model = RECORD_MODELS[kind]
    return func.count(model.id)


async def window_total(
    db: AsyncSession,
    kind: RecordKind,
    window: Window,
    profile_id: Optional[uuid.UUID] = None,
) -> int:
    model = RECORD_MODELS[kind]
    stmt = select(_measure(kind)).where(*window.bounds(model.created_at))
    if profile_id is not None:
        stmt = stmt.where(model.profile_id == profile_id)
    res = await db.execute(stmt)
    return int(res.scalar() or 0)


async def month_totals(
    db: AsyncSession,
    kind: RecordKind,
    windows: MonthWindows,
    profile_id: Optional[uuid.UUID] = None,
) -> tuple[int, int]:
    """(previous month, current month)"""
    prev = await window_total(db, kind, windows.previous, profile_id)
    curr = await window_total(db, kind, windows.current, profile_id)
    return prev, curr


async def list_in_window(
    db: AsyncSession,
    kind: RecordKind,
    window: Window,
    profile_id: Optional[uuid.UUID] = None,
) -> list:
    model = RECORD_MODELS[kind]
    stmt = (
        select(model)
        .where(*window.bounds(model.created_at))
        .options(*record_options(kind))
        .order_by(model.date.desc(), model.time.desc(), model.created_at.desc())
    )
    if profile_id is not None:
        stmt = stmt.where(model.profile_id == profile_id)
    return list((await db.execute(stmt)).scalars().all())


async def highest_sale(db: AsyncSession, window: Window) -> Optional[Sale]:
    """Largest revenue in the window; the earliest logged wins a tie."""
    stmt = (
        select(Sale)
        .where(*window.bounds(Sale.created_at))
        .options(*record_options(RecordKind.SALE))
        .order_by(Sale.revenue.desc(), Sale.created_at.asc(), Sale.id.asc())
        .limit(1)
    )
    return (await db.execute(stmt)).scalars().first()


async def leaderboard(
    db: AsyncSession,
    limit: Optional[int] = None,
    min_points: Optional[int] = None,
) -> list[Profile]:
    """Active profiles by all-time points, ties by id."""
    stmt = (
        select(Profile)
        .where(Profile.active.is_(True))
        .order_by(Profile.points.desc(), Profile.id.asc())
    )
    if min_points is not None:
        stmt = stmt.where(Profile.points > min_points)
    if limit is not None:
        stmt = stmt.limit(limit)
    return list((await db.execute(stmt)).scalars().all())
