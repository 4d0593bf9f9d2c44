# salesboard/api/v1/bookings.py
from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from salesboard.api.deps.records import get_month_windows, record_for_write
from salesboard.api.v1.auth import get_current_profile
from salesboard.core.points import RecordKind
from salesboard.core.windows import MonthWindows
from salesboard.crud.aggregates import list_in_window, month_totals
from salesboard.crud.records import create_record, delete_record, update_record
from salesboard.db.session import get_db
from salesboard.models.booking import Booking
from salesboard.models.profile import Profile
from salesboard.schemas.records import BookingCreate, BookingItem, BookingOut, BookingSummary, BookingUpdate

router = APIRouter(prefix="/bookings", tags=["bookings"])

KIND = RecordKind.BOOKING


@router.get("", response_model=BookingSummary)
async def list_bookings(
    profile_id: Optional[uuid.UUID] = Query(default=None),
    windows: MonthWindows = Depends(get_month_windows),
    db: AsyncSession = Depends(get_db),
    _: Profile = Depends(get_current_profile),
):
    """
    Booked meetings: previous vs current month count, and this month's rows.
    """
    prev, curr = await month_totals(db, KIND, windows, profile_id)
    rows = await list_in_window(db, KIND, windows.current, profile_id)
    return BookingSummary.from_counts(
        prev,
        curr,
        bookings=[BookingItem.model_validate(b) for b in rows],
    )


@router.post("", response_model=BookingOut, status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: BookingCreate,
    db: AsyncSession = Depends(get_db),
    profile: Profile = Depends(get_current_profile),
):
    booking = Booking(name=payload.name, date=payload.date, time=payload.time)
    return await create_record(db, KIND, profile, booking)


@router.put("/{record_id}", response_model=BookingOut)
async def update_booking(
    payload: BookingUpdate,
    booking: Booking = Depends(record_for_write(KIND)),
    db: AsyncSession = Depends(get_db),
):
    return await update_record(db, KIND, booking, payload.model_dump(exclude_unset=True, exclude_none=True))


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_booking(
    booking: Booking = Depends(record_for_write(KIND)),
    db: AsyncSession = Depends(get_db),
):
    await delete_record(db, KIND, booking)
    return None
