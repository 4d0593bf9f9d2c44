from __future__ import annotations

from fastapi import Depends

from salesboard.api.v1.auth import get_current_profile
from salesboard.core.errors import forbidden
from salesboard.models.profile import Profile


async def require_admin(profile: Profile = Depends(get_current_profile)) -> Profile:
    if not profile.is_admin:
        raise forbidden("Insufficient role: ADMIN required")
    return profile
