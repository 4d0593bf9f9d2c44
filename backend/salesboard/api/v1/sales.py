# salesboard/api/v1/sales.py
from __future__ import annotations

import uuid
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from salesboard.api.deps.records import get_month_windows, record_for_write
from salesboard.api.v1.auth import get_current_profile
from salesboard.core.errors import not_found
from salesboard.core.notifications import post_to_slack, sale_message
from salesboard.core.points import RecordKind
from salesboard.core.windows import MonthWindows
from salesboard.crud.aggregates import highest_sale, list_in_window, month_totals
from salesboard.crud.records import create_record, delete_record, update_record
from salesboard.db.session import get_db
from salesboard.models.profile import Profile
from salesboard.models.sale import Sale, SaleService
from salesboard.models.service import Service
from salesboard.schemas.records import SaleCreate, SaleItem, SaleOut, SaleServiceIn, SaleSummary, SaleUpdate

router = APIRouter(prefix="/sales", tags=["sales"])

KIND = RecordKind.SALE


async def _line_items(db: AsyncSession, items: List[SaleServiceIn]) -> List[SaleService]:
    """Build join rows, rejecting unknown service ids."""
    ids = {i.service_id for i in items}
    if ids:
        found = set((await db.execute(select(Service.id).where(Service.id.in_(ids)))).scalars().all())
        if ids - found:
            raise not_found("Service")
    return [SaleService(service_id=i.service_id, subscription=i.subscription) for i in items]


@router.get("", response_model=SaleSummary)
async def list_sales(
    profile_id: Optional[uuid.UUID] = Query(default=None),
    windows: MonthWindows = Depends(get_month_windows),
    db: AsyncSession = Depends(get_db),
    _: Profile = Depends(get_current_profile),
):
    """
    Sales: totals are summed revenue (SEK). `highest` is the biggest deal of
    the current month across all salespeople.
    """
    prev, curr = await month_totals(db, KIND, windows, profile_id)
    top = await highest_sale(db, windows.current)
    rows = await list_in_window(db, KIND, windows.current, profile_id)
    return SaleSummary.from_counts(
        prev,
        curr,
        highest=SaleItem.model_validate(top) if top else None,
        sales=[SaleItem.model_validate(s) for s in rows],
    )


@router.post("", response_model=SaleOut, status_code=status.HTTP_201_CREATED)
async def create_sale(
    payload: SaleCreate,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    profile: Profile = Depends(get_current_profile),
):
    sale = Sale(
        name=payload.name,
        date=payload.date,
        time=payload.time,
        amount=payload.amount,
        revenue=payload.revenue,
        invoice=payload.invoice,
        customer=payload.customer.value if payload.customer else None,
        services=await _line_items(db, payload.services),
    )
    sale = await create_record(db, KIND, profile, sale)

    background_tasks.add_task(post_to_slack, sale_message(profile.name, sale.revenue))
    return sale


@router.put("/{record_id}", response_model=SaleOut)
async def update_sale(
    payload: SaleUpdate,
    sale: Sale = Depends(record_for_write(KIND)),
    db: AsyncSession = Depends(get_db),
):
    changes = payload.model_dump(exclude_unset=True, exclude_none=True, exclude={"services", "customer"})

    fields = payload.model_fields_set
    if "customer" in fields:
        # null clears the customer type
        changes["customer"] = payload.customer.value if payload.customer else None
    if "services" in fields and payload.services is not None:
        changes["services"] = await _line_items(db, payload.services)

    return await update_record(db, KIND, sale, changes)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_sale(
    sale: Sale = Depends(record_for_write(KIND)),
    db: AsyncSession = Depends(get_db),
):
    await delete_record(db, KIND, sale)
    return None
