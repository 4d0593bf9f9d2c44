from __future__ import annotations

from sqlalchemy import CheckConstraint, Integer
from sqlalchemy.orm import Mapped, mapped_column

from salesboard.db.base import Base
from salesboard.models.record import RecordMixin


class Offer(RecordMixin, Base):
    __tablename__ = "offers"
    __table_args__ = (
        CheckConstraint("amount >= 1 AND amount <= 5", name="ck_offers_amount_range"),
    )

    # number of offers sent in this entry
    amount: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
