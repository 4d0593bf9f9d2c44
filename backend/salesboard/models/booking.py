from __future__ import annotations

from salesboard.db.base import Base
from salesboard.models.record import RecordMixin


class Booking(RecordMixin, Base):
    """A meeting booked on behalf of a colleague."""

    __tablename__ = "bookings"
