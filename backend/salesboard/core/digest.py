# salesboard/core/digest.py
"""
Morning summary posted to the team channel: yesterday's deals, meetings and
offers, plus the current top 3.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from salesboard.core.windows import Window, trailing_day
from salesboard.crud.aggregates import leaderboard
from salesboard.models.meeting import Meeting
from salesboard.models.offer import Offer
from salesboard.models.sale import Sale

logger = logging.getLogger(__name__)

TOP_PROFILES = 3
MEDALS = ("🥇", "🥈", "🥉")


@dataclass
class DailyDigest:
    window: Window
    meetings: int = 0
    offers: int = 0
    sales: int = 0
    order_value: int = 0
    top_profiles: list[str] = field(default_factory=list)


async def _count_rows(db: AsyncSession, model, window: Window) -> int:
    stmt = select(func.count(model.id)).where(*window.bounds(model.created_at))
    return int((await db.execute(stmt)).scalar() or 0)


async def collect_digest(db: AsyncSession, as_of: datetime | None = None) -> DailyDigest:
    """
    Meetings and offers are counted as logged rows (an offer of amount 3 is
    one row here). Only profiles with points above zero make the top list.
    """
    window = trailing_day(as_of)

    stmt = select(func.count(Sale.id), func.coalesce(func.sum(Sale.revenue), 0)).where(
        *window.bounds(Sale.created_at)
    )
    sales, order_value = (await db.execute(stmt)).one()

    top = await leaderboard(db, limit=TOP_PROFILES, min_points=0)

    return DailyDigest(
        window=window,
        meetings=await _count_rows(db, Meeting, window),
        offers=await _count_rows(db, Offer, window),
        sales=int(sales or 0),
        order_value=int(order_value or 0),
        top_profiles=[p.name for p in top],
    )


def render_digest(digest: DailyDigest) -> str:
    lines = [
        "God morgon kära kollegor!",
        "",
        f"Igår utfärdades {digest.sales}st affärer med ett ordervärde på {digest.order_value} SEK. "
        f"Det genomfördes {digest.meetings} möten och skickades {digest.offers}st offerter. "
        "Bra jobbat allihopa! 🎉🏆🥂",
        "",
        "Kan vi slå dem siffrorna idag?",
    ]

    # the podium is only shown when it is full
    if len(digest.top_profiles) == TOP_PROFILES:
        lines += ["", "Topplistan ser ut som följande:", ""]
        lines += [f"{medal} {name}" for medal, name in zip(MEDALS, digest.top_profiles)]

    lines += ["", "Lycka till!", "Hälsningar, KISR 🤖"]
    return "\n".join(lines)
