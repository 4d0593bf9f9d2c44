# salesboard/api/v1/offers.py
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
from salesboard.models.offer import Offer
from salesboard.models.profile import Profile
from salesboard.schemas.records import OfferCreate, OfferItem, OfferOut, OfferSummary, OfferUpdate

router = APIRouter(prefix="/offers", tags=["offers"])

KIND = RecordKind.OFFER


@router.get("", response_model=OfferSummary)
async def list_offers(
    profile_id: Optional[uuid.UUID] = Query(default=None),
    windows: MonthWindows = Depends(get_month_windows),
    db: AsyncSession = Depends(get_db),
    _: Profile = Depends(get_current_profile),
):
    """
    Offers sent: totals are the sum of `amount`, not the number of rows.
    """
    prev, curr = await month_totals(db, KIND, windows, profile_id)
    rows = await list_in_window(db, KIND, windows.current, profile_id)
    return OfferSummary.from_counts(
        prev,
        curr,
        offers=[OfferItem.model_validate(o) for o in rows],
    )


@router.post("", response_model=OfferOut, status_code=status.HTTP_201_CREATED)
async def create_offer(
    payload: OfferCreate,
    db: AsyncSession = Depends(get_db),
    profile: Profile = Depends(get_current_profile),
):
    offer = Offer(name=payload.name, date=payload.date, time=payload.time, amount=payload.amount)
    return await create_record(db, KIND, profile, offer)


@router.put("/{record_id}", response_model=OfferOut)
async def update_offer(
    payload: OfferUpdate,
    offer: Offer = Depends(record_for_write(KIND)),
    db: AsyncSession = Depends(get_db),
):
    # amount changes move the owner's points by the difference only
    return await update_record(db, KIND, offer, payload.model_dump(exclude_unset=True, exclude_none=True))


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_offer(
    offer: Offer = Depends(record_for_write(KIND)),
    db: AsyncSession = Depends(get_db),
):
    await delete_record(db, KIND, offer)
    return None
