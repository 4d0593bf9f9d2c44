from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from salesboard.api.deps.records import get_month_windows
from salesboard.api.v1.auth import get_current_profile
from salesboard.core.errors import not_found
from salesboard.core.exports import content_disposition, render_csv
from salesboard.core.points import RecordKind
from salesboard.core.windows import MonthWindows
from salesboard.crud.aggregates import list_in_window
from salesboard.db.session import get_db
from salesboard.models.profile import Profile

router = APIRouter(prefix="/exports", tags=["exports"])


@router.get("/{kind}.csv")
async def export_records(
    kind: RecordKind,
    profile_id: Optional[uuid.UUID] = Query(default=None, description="Defaults to the caller."),
    windows: MonthWindows = Depends(get_month_windows),
    db: AsyncSession = Depends(get_db),
    current: Profile = Depends(get_current_profile),
):
    """
    Current-month records of one salesperson as CSV, named after them.
    """
    target = current
    if profile_id is not None and profile_id != current.id:
        target = await db.get(Profile, profile_id)
        if target is None:
            raise not_found("Profile")

    records = await list_in_window(db, kind, windows.current, target.id)
    body = render_csv(kind, records)

    return Response(
        content=body,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": content_disposition(f"{target.name}.csv")},
    )
