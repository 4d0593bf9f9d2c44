# salesboard/crud/records.py
"""
Record writes paired with their profile counter update.

Each helper mutates the record and the owning profile in the same session
and commits once, so either both land or neither does. The profile is read,
modified in Python and written back; two concurrent writes for the same
profile can therefore lose one delta (no row lock or version column).
"""
from __future__ import annotations

import logging
import uuid
from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from salesboard.core.errors import not_found, persistence_failure
from salesboard.core.points import (
    RecordKind,
    apply_delta,
    delta_for_create,
    delta_for_delete,
    delta_for_update,
    quantity_of,
)
from salesboard.models.booking import Booking
from salesboard.models.meeting import Meeting
from salesboard.models.offer import Offer
from salesboard.models.profile import Profile
from salesboard.models.sale import Sale, SaleService

logger = logging.getLogger(__name__)

RECORD_MODELS: dict[RecordKind, type] = {
    RecordKind.MEETING: Meeting,
    RecordKind.OFFER: Offer,
    RecordKind.SALE: Sale,
    RecordKind.BOOKING: Booking,
}


def record_options(kind: RecordKind) -> list:
    model = RECORD_MODELS[kind]
    opts = [selectinload(model.profile)]
    if kind is RecordKind.SALE:
        opts.append(selectinload(Sale.services).selectinload(SaleService.service))
    return opts


async def get_record(db: AsyncSession, kind: RecordKind, record_id: uuid.UUID):
    model = RECORD_MODELS[kind]
    stmt = (
        select(model)
        .where(model.id == record_id)
        .options(*record_options(kind))
        .execution_options(populate_existing=True)
    )
    return (await db.execute(stmt)).scalar_one_or_none()


async def commit_or_fail(db: AsyncSession, action: str) -> None:
    try:
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Transaction aborted: %s", action)
        raise persistence_failure(action)


async def _owner_of(db: AsyncSession, record: Any) -> Profile:
    owner = await db.get(Profile, record.profile_id)
    if owner is None:
        raise not_found("Profile")
    return owner


async def create_record(db: AsyncSession, kind: RecordKind, profile: Profile, record: Any):
    """
    Insert `record` for `profile` and credit its points/counter.
    Returns the record reloaded with its relationships.
    """
    record.profile_id = profile.id
    delta = delta_for_create(kind, quantity_of(kind, record))

    db.add(record)
    apply_delta(profile, delta)
    await commit_or_fail(db, f"create {kind.value}")

    logger.info(
        "%s created for profile %s: points %+d, %s %+d",
        kind.value, profile.id, delta.points, delta.counter, delta.quantity,
    )
    return await get_record(db, kind, record.id)


async def update_record(db: AsyncSession, kind: RecordKind, record: Any, changes: Mapping[str, Any]):
    """
    Apply `changes` to a loaded record and adjust the owner by the quantity
    difference. `record` must carry its pre-update values.
    """
    old_quantity = quantity_of(kind, record)
    for field, value in changes.items():
        setattr(record, field, value)
    delta = delta_for_update(kind, old_quantity, quantity_of(kind, record))

    if not delta.is_zero:
        owner = await _owner_of(db, record)
        apply_delta(owner, delta)

    await commit_or_fail(db, f"update {kind.value}")

    logger.info(
        "%s %s updated: points %+d, %s %+d",
        kind.value, record.id, delta.points, delta.counter, delta.quantity,
    )
    return await get_record(db, kind, record.id)


async def delete_record(db: AsyncSession, kind: RecordKind, record: Any) -> None:
    """Remove a record and take back its full contribution from the owner."""
    delta = delta_for_delete(kind, quantity_of(kind, record))
    owner = await _owner_of(db, record)

    await db.delete(record)
    apply_delta(owner, delta)
    await commit_or_fail(db, f"delete {kind.value}")

    logger.info(
        "%s %s deleted: points %+d, %s %+d",
        kind.value, record.id, delta.points, delta.counter, delta.quantity,
    )
