# salesboard/core/errors.py
from __future__ import annotations

from fastapi import HTTPException, status

NOT_AUTHENTICATED = "not_authenticated"
FORBIDDEN = "forbidden"
NOT_FOUND = "not_found"
INVALID_LEVEL_UP = "invalid_level_up"
SERVICE_IN_USE = "service_in_use"
CONFLICT = "conflict"
PERSISTENCE_FAILURE = "persistence_failure"


def api_error(status_code: int, error: str, description: str, **extra) -> HTTPException:
    """
    Structured error body: {"detail": {"error": <kind>, "description": <text>, ...}}
    """
    detail = {"error": error, "description": description}
    detail.update(extra)
    return HTTPException(status_code=status_code, detail=detail)


def not_authenticated(description: str = "The user does not have an active session or is not authenticated") -> HTTPException:
    return api_error(status.HTTP_401_UNAUTHORIZED, NOT_AUTHENTICATED, description)


def forbidden(description: str) -> HTTPException:
    return api_error(status.HTTP_403_FORBIDDEN, FORBIDDEN, description)


def not_found(what: str) -> HTTPException:
    return api_error(status.HTTP_404_NOT_FOUND, NOT_FOUND, f"{what} not found")


def conflict(description: str) -> HTTPException:
    return api_error(status.HTTP_409_CONFLICT, CONFLICT, description)


def persistence_failure(action: str) -> HTTPException:
    return api_error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        PERSISTENCE_FAILURE,
        f"failed to {action}; no changes were saved",
    )
