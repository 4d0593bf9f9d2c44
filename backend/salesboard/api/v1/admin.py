# salesboard/api/v1/admin.py
from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from salesboard.api.deps.profiles import require_admin
from salesboard.core.errors import conflict, forbidden, not_found
from salesboard.core.roles import ProfileRole
from salesboard.crud.records import commit_or_fail
from salesboard.db.session import get_db
from salesboard.models.profile import Profile
from salesboard.schemas.profile import ProfileCreate, ProfileOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/profiles", response_model=ProfileOut, status_code=status.HTTP_201_CREATED)
async def create_profile(
    payload: ProfileCreate,
    db: AsyncSession = Depends(get_db),
    admin: Profile = Depends(require_admin),
):
    """
    Create a salesperson account. They log in with a magic code sent to `email`.
    """
    email = Profile.normalize_email(str(payload.email))

    existing = (await db.execute(select(Profile.id).where(Profile.email == email))).first()
    if existing:
        raise conflict("A profile with this email already exists")

    profile = Profile(
        id=uuid.uuid4(),
        name=payload.name,
        email=email,
        role=ProfileRole.USER.value,
        active=True,
    )
    db.add(profile)

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        # race: created concurrently
        raise conflict("A profile with this email already exists")

    await db.refresh(profile)
    logger.info("Admin %s created profile %s", admin.id, profile.id)
    return profile


@router.delete("/profiles/{profile_id}", response_model=ProfileOut)
async def deactivate_profile(
    profile_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: Profile = Depends(require_admin),
):
    """
    Soft delete: the profile stops appearing on leaderboards and can no
    longer log in, but keeps ownership of its records.
    """
    profile = await db.get(Profile, profile_id)
    if not profile:
        raise not_found("Profile")
    if profile.id == admin.id:
        raise forbidden("Admins cannot deactivate themselves")

    profile.active = False
    profile.magic_code = None
    profile.magic_code_expires_at = None

    await commit_or_fail(db, "deactivate profile")
    await db.refresh(profile)
    logger.info("Admin %s deactivated profile %s", admin.id, profile.id)
    return profile
