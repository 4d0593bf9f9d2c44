# salesboard/api/v1/meetings.py
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
from salesboard.models.meeting import Meeting
from salesboard.models.profile import Profile
from salesboard.schemas.records import MeetingCreate, MeetingItem, MeetingOut, MeetingSummary, MeetingUpdate

router = APIRouter(prefix="/meetings", tags=["meetings"])

KIND = RecordKind.MEETING


@router.get("", response_model=MeetingSummary)
async def list_meetings(
    profile_id: Optional[uuid.UUID] = Query(default=None),
    windows: MonthWindows = Depends(get_month_windows),
    db: AsyncSession = Depends(get_db),
    _: Profile = Depends(get_current_profile),
):
    """
    Meetings held: previous vs current month count, and this month's rows.
    """
    prev, curr = await month_totals(db, KIND, windows, profile_id)
    rows = await list_in_window(db, KIND, windows.current, profile_id)
    return MeetingSummary.from_counts(
        prev,
        curr,
        meetings=[MeetingItem.model_validate(m) for m in rows],
    )


@router.post("", response_model=MeetingOut, status_code=status.HTTP_201_CREATED)
async def create_meeting(
    payload: MeetingCreate,
    db: AsyncSession = Depends(get_db),
    profile: Profile = Depends(get_current_profile),
):
    meeting = Meeting(name=payload.name, date=payload.date, time=payload.time)
    return await create_record(db, KIND, profile, meeting)


@router.put("/{record_id}", response_model=MeetingOut)
async def update_meeting(
    payload: MeetingUpdate,
    meeting: Meeting = Depends(record_for_write(KIND)),
    db: AsyncSession = Depends(get_db),
):
    return await update_record(db, KIND, meeting, payload.model_dump(exclude_unset=True, exclude_none=True))


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meeting(
    meeting: Meeting = Depends(record_for_write(KIND)),
    db: AsyncSession = Depends(get_db),
):
    await delete_record(db, KIND, meeting)
    return None
