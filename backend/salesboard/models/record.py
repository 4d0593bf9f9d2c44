# backend/salesboard/models/record.py
from __future__ import annotations

import datetime as dt
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, declared_attr, mapped_column, relationship
from sqlalchemy.sql import func

if TYPE_CHECKING:
    from salesboard.models.profile import Profile


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class RecordMixin:
    """
    Columns shared by meetings, offers, sales and bookings.

    NOTE:
      - `date`/`time` are what the salesperson typed in and may be edited.
      - `created_at` is set once at insert and is the key for the monthly
        windows; it never changes afterwards.
    """

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # counterparty / company
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    # HH:MM
    time: Mapped[str] = mapped_column(String(8), nullable=False, default="")

    @declared_attr
    def profile_id(cls) -> Mapped[uuid.UUID]:
        return mapped_column(
            Uuid,
            ForeignKey("profiles.id", ondelete="RESTRICT"),
            nullable=False,
            index=True,
        )

    @declared_attr
    def profile(cls) -> Mapped[Profile]:
        return relationship("Profile")

    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        index=True,
    )
