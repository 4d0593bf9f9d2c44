from __future__ import annotations

import uuid
from datetime import datetime
from typing import Callable, Optional

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from salesboard.api.v1.auth import get_current_profile
from salesboard.core.errors import forbidden, not_found
from salesboard.core.points import RecordKind
from salesboard.core.windows import MonthWindows, month_windows
from salesboard.crud.records import get_record
from salesboard.db.session import get_db
from salesboard.models.profile import Profile


def get_month_windows(
    as_of: Optional[datetime] = Query(
        default=None,
        description="Reference time for the monthly windows (defaults to now).",
    ),
) -> MonthWindows:
    return month_windows(as_of)


def record_for_write(kind: RecordKind) -> Callable:
    """
    Load the record named by the `record_id` path param for update/delete.
    Only its owner or an ADMIN may touch it.
    """

    async def _loader(
        record_id: uuid.UUID,
        db: AsyncSession = Depends(get_db),
        profile: Profile = Depends(get_current_profile),
    ):
        record = await get_record(db, kind, record_id)
        if record is None:
            raise not_found(kind.value.capitalize())
        if record.profile_id != profile.id and not profile.is_admin:
            raise forbidden(f"Only the owner or an admin can change this {kind.value}")
        return record

    return _loader
