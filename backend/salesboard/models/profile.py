# backend/salesboard/models/profile.py
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from salesboard.db.base import Base


class Profile(Base):
    """
    A salesperson's ledger.

    Counters (meeting_count, offer_count, sale_count, booking_count) hold the
    progress since the last level-up; the points engine is the only writer.
    Profiles are never hard-deleted: `active=False` keeps record ownership.
    """

    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True, nullable=False)

    # ADMIN | USER
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="USER")
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    avatar: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)

    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    meeting_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    offer_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sale_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    booking_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Monthly targets (user-editable)
    meeting_goal: Mapped[int] = mapped_column(Integer, nullable=False, default=8)
    offer_goal: Mapped[int] = mapped_column(Integer, nullable=False, default=6)
    sale_goal: Mapped[int] = mapped_column(Integer, nullable=False, default=14000)
    booking_goal: Mapped[int] = mapped_column(Integer, nullable=False, default=10)

    # Email magic code auth
    magic_code: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    magic_code_expires_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    @property
    def is_admin(self) -> bool:
        return (self.role or "").upper() == "ADMIN"

    @staticmethod
    def normalize_email(value: str) -> str:
        return value.strip().lower()
