# salesboard/api/v1/profiles.py
from __future__ import annotations

import logging
import uuid
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from salesboard.api.deps.records import get_month_windows
from salesboard.api.v1.auth import get_current_profile
from salesboard.core.errors import INVALID_LEVEL_UP, api_error, not_found
from salesboard.core.notifications import level_up_message, post_to_slack
from salesboard.core.points import LevelUpNotAllowed, RecordKind, can_level_up, level_requirements, level_up
from salesboard.core.windows import MonthWindows, capped, goal_progress
from salesboard.crud.aggregates import leaderboard, month_totals
from salesboard.crud.records import commit_or_fail
from salesboard.db.session import get_db
from salesboard.models.profile import Profile
from salesboard.schemas.profile import (
    AreaStats,
    LeaderboardEntry,
    LevelRequirementOut,
    LevelStatus,
    ProfileOut,
    ProfileSettingsUpdate,
    ProfileStats,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profiles", tags=["profiles"])

# response field -> (record kind, goal attribute)
AREAS = {
    "meetings": (RecordKind.MEETING, "meeting_goal"),
    "offers": (RecordKind.OFFER, "offer_goal"),
    "sales": (RecordKind.SALE, "sale_goal"),
    "bookings": (RecordKind.BOOKING, "booking_goal"),
}


def _level_status(profile: Profile) -> LevelStatus:
    return LevelStatus(
        level=profile.level,
        eligible=can_level_up(profile),
        requirements=[LevelRequirementOut.model_validate(r) for r in level_requirements(profile)],
    )


@router.get("", response_model=List[LeaderboardEntry])
async def list_profiles(
    db: AsyncSession = Depends(get_db),
    _: Profile = Depends(get_current_profile),
):
    """
    Leaderboard: active profiles ordered by all-time points.
    """
    return await leaderboard(db)


@router.get("/{profile_id}/stats", response_model=ProfileStats)
async def get_profile_stats(
    profile_id: uuid.UUID,
    windows: MonthWindows = Depends(get_month_windows),
    db: AsyncSession = Depends(get_db),
    _: Profile = Depends(get_current_profile),
):
    """
    Per-salesperson monthly numbers with goal progress and level-up status.
    """
    target = await db.get(Profile, profile_id)
    if target is None:
        raise not_found("Profile")

    areas = {}
    for field, (kind, goal_attr) in AREAS.items():
        prev, curr = await month_totals(db, kind, windows, target.id)
        goal = getattr(target, goal_attr)
        progress = goal_progress(curr, goal)
        areas[field] = AreaStats.from_counts(
            prev,
            curr,
            goal=goal,
            goal_progress=round(progress, 2),
            goal_progress_display=round(capped(progress), 2),
        )

    return ProfileStats(
        profile=ProfileOut.model_validate(target),
        window_start=windows.current.start,
        window_end=windows.current.end,
        level_up=_level_status(target),
        **areas,
    )


@router.patch("/me", response_model=ProfileOut)
async def update_my_settings(
    payload: ProfileSettingsUpdate,
    db: AsyncSession = Depends(get_db),
    profile: Profile = Depends(get_current_profile),
):
    """
    Settings form: name, avatar and monthly goals. Counters are not writable here.
    """
    data = payload.model_dump(exclude_unset=True)
    for field, value in data.items():
        if value is None and field != "avatar":
            continue
        setattr(profile, field, value)

    await commit_or_fail(db, "update profile")
    await db.refresh(profile)
    return profile


@router.post("/me/level-up", response_model=ProfileOut)
async def level_up_me(
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    profile: Profile = Depends(get_current_profile),
):
    """
    Eligibility is decided here from the stored counters; whatever the client
    showed is irrelevant.
    """
    await db.refresh(profile)

    try:
        new_level = level_up(profile)
    except LevelUpNotAllowed as e:
        raise api_error(
            status.HTTP_409_CONFLICT,
            INVALID_LEVEL_UP,
            str(e),
            level=e.level,
            missing=[r.counter for r in e.missing],
        )

    await commit_or_fail(db, "level up")
    await db.refresh(profile)
    logger.info("Profile %s reached level %d", profile.id, new_level)

    background_tasks.add_task(post_to_slack, level_up_message(profile.name, new_level))
    return profile
