from __future__ import annotations

import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from fastapi.security import HTTPBearer
from jose import JWTError, jwt

from salesboard.core.config import settings
from salesboard.core.errors import not_authenticated

# auto_error=False so a missing header gets our structured 401 instead of a bare 403
bearer_scheme = HTTPBearer(auto_error=False)

MAGIC_CODE_DIGITS = 6


def generate_magic_code() -> str:
    """Six digits, never starting with 0."""
    low = 10 ** (MAGIC_CODE_DIGITS - 1)
    return str(low + secrets.randbelow(9 * low))


def magic_code_matches(stored: Optional[str], given: str) -> bool:
    if not stored:
        return False
    # compare_digest rejects non-ASCII str
    return secrets.compare_digest(stored.encode("utf-8"), given.strip().encode("utf-8"))


def _strip_token(token: Optional[str]) -> str:
    # pasted tokens often carry quotes or a second "Bearer " prefix
    t = (token or "").strip().strip("\"'").strip()
    if t.lower().startswith("bearer "):
        t = t[7:].strip()
    return t


def create_access_token(subject: str, expires_minutes: Optional[int] = None) -> str:
    issued = datetime.now(timezone.utc)
    expires = issued + timedelta(minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    claims: dict[str, Any] = {
        "sub": str(subject),
        "iat": int(issued.timestamp()),
        "exp": int(expires.timestamp()),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: Optional[str]) -> uuid.UUID:
    """Profile id carried in `sub`; any defect in the token is a 401."""
    token = _strip_token(token)
    if not token:
        raise not_authenticated("Invalid token")

    try:
        claims = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require_sub": True, "require_exp": True},
        )
    except JWTError:
        raise not_authenticated("Invalid token")

    try:
        return uuid.UUID(str(claims.get("sub")))
    except ValueError:
        raise not_authenticated("Invalid token subject")
