from __future__ import annotations

import logging
import secrets
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Header, Query
from sqlalchemy.ext.asyncio import AsyncSession

from salesboard.core.config import settings
from salesboard.core.digest import collect_digest, render_digest
from salesboard.core.errors import forbidden, not_found
from salesboard.core.notifications import post_to_slack
from salesboard.db.session import get_db
from salesboard.schemas.dashboard import DigestOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/digest", tags=["digest"])


def require_digest_token(x_digest_token: Optional[str] = Header(default=None)) -> None:
    """
    Called by a scheduler, not a logged-in user. Without DIGEST_TOKEN
    configured the endpoint does not exist.
    """
    expected = settings.DIGEST_TOKEN
    if not expected:
        raise not_found("Digest endpoint")
    if not x_digest_token or not secrets.compare_digest(
        x_digest_token.encode("utf-8"), expected.encode("utf-8")
    ):
        raise forbidden("Invalid digest token")


@router.post("/daily", response_model=DigestOut, dependencies=[Depends(require_digest_token)])
async def post_daily_digest(
    as_of: Optional[datetime] = Query(default=None, description="End of the 24h window (defaults to now)."),
    db: AsyncSession = Depends(get_db),
):
    digest = await collect_digest(db, as_of)
    text = render_digest(digest)

    posted = await post_to_slack(text)
    logger.info(
        "Daily digest: %d sales, %d SEK, %d meetings, %d offers (posted=%s)",
        digest.sales, digest.order_value, digest.meetings, digest.offers, posted,
    )

    return DigestOut(
        window_start=digest.window.start,
        window_end=digest.window.end,
        meetings=digest.meetings,
        offers=digest.offers,
        sales=digest.sales,
        order_value=digest.order_value,
        top_profiles=digest.top_profiles,
        text=text,
        posted=posted,
    )
