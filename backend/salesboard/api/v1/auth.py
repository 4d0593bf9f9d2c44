# backend/salesboard/api/v1/auth.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from salesboard.core.config import settings
from salesboard.core.errors import forbidden, not_authenticated
from salesboard.core.security import (
    bearer_scheme,
    create_access_token,
    decode_access_token,
    generate_magic_code,
    magic_code_matches,
)
from salesboard.db.session import get_db
from salesboard.models.profile import Profile
from salesboard.schemas.auth import MagicCodeRequest, MagicCodeVerify, TokenResponse
from salesboard.schemas.profile import ProfileOut

router = APIRouter(prefix="/auth", tags=["auth"])

MAGIC_CODE_EXPIRY_MINUTES = 10


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_aware(ts: datetime) -> datetime:
    # some backends hand back naive UTC
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


def _should_return_magic_code_in_response() -> bool:
    """
    In production the code only travels by email; elsewhere it is returned
    to simplify manual testing.
    """
    return not settings.is_strict_environment


async def purge_expired_magic_codes(db: AsyncSession) -> None:
    stmt = (
        update(Profile)
        .where(Profile.magic_code_expires_at.is_not(None))
        .where(Profile.magic_code_expires_at < _utcnow())
        .values(magic_code=None, magic_code_expires_at=None)
    )
    await db.execute(stmt)


@router.post("/request-code")
async def request_code(payload: MagicCodeRequest, db: AsyncSession = Depends(get_db)):
    """
    Body: {"email": "seller@example.com"}
    Only existing, active profiles can log in; accounts are created by an admin.
    The response is the same either way so emails cannot be probed.
    """
    email = Profile.normalize_email(payload.email)

    await purge_expired_magic_codes(db)

    profile = (await db.execute(select(Profile).where(Profile.email == email))).scalar_one_or_none()

    resp = {"status": "ok", "expires_in_minutes": MAGIC_CODE_EXPIRY_MINUTES}
    if profile is None or not profile.active:
        await db.commit()
        return resp

    code = generate_magic_code()
    profile.magic_code = code
    profile.magic_code_expires_at = _utcnow() + timedelta(minutes=MAGIC_CODE_EXPIRY_MINUTES)
    await db.commit()

    if _should_return_magic_code_in_response():
        resp["code"] = code
    return resp


@router.post("/verify-code", response_model=TokenResponse)
async def verify_code(payload: MagicCodeVerify, db: AsyncSession = Depends(get_db)) -> TokenResponse:
    email = Profile.normalize_email(payload.email)

    profile = (await db.execute(select(Profile).where(Profile.email == email))).scalar_one_or_none()

    if not profile or not profile.active or not profile.magic_code_expires_at:
        raise not_authenticated("Invalid code")

    if not magic_code_matches(profile.magic_code, payload.code):
        raise not_authenticated("Invalid code")

    if _as_aware(profile.magic_code_expires_at) < _utcnow():
        raise not_authenticated("Code expired")

    # One-time use
    profile.magic_code = None
    profile.magic_code_expires_at = None
    await db.commit()

    return TokenResponse(access_token=create_access_token(subject=str(profile.id)))


async def get_current_profile(
    credentials=Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> Profile:
    """
    Dependency for protected endpoints: the active profile behind the bearer token.
    Deactivated profiles are rejected even with an unexpired token.
    """
    if credentials is None:
        raise not_authenticated()

    profile = await db.get(Profile, decode_access_token(credentials.credentials))
    if not profile:
        raise not_authenticated("Profile not found")

    if not profile.active:
        raise forbidden("Profile is deactivated")

    return profile


@router.get("/me", response_model=ProfileOut)
async def me(profile: Profile = Depends(get_current_profile)) -> Profile:
    return profile
