from __future__ import annotations

from salesboard.db.base import Base
from salesboard.models.record import RecordMixin


class Meeting(RecordMixin, Base):
    __tablename__ = "meetings"
