from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from salesboard.schemas.profile import LeaderboardEntry
from salesboard.schemas.records import MonthTotals, SaleItem


class DashboardOut(BaseModel):
    window_start: datetime
    window_end: datetime

    meetings: MonthTotals
    offers: MonthTotals
    sales: MonthTotals
    bookings: MonthTotals

    highest_sale: Optional[SaleItem] = None
    top_profiles: List[LeaderboardEntry]


class DigestOut(BaseModel):
    window_start: datetime
    window_end: datetime

    meetings: int
    offers: int
    sales: int
    order_value: int
    top_profiles: List[str]

    text: str
    posted: bool
