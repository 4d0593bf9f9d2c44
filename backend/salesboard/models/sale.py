# backend/salesboard/models/sale.py
from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from salesboard.db.base import Base
from salesboard.models.record import RecordMixin


class Sale(RecordMixin, Base):
    __tablename__ = "sales"
    __table_args__ = (
        CheckConstraint("amount >= 1 AND amount <= 5", name="ck_sales_amount_range"),
        CheckConstraint("revenue >= 0", name="ck_sales_revenue_non_negative"),
    )

    amount: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    # order value in whole SEK
    revenue: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)

    # billing-term label, e.g. "1 månad"
    invoice: Mapped[str] = mapped_column(String(64), nullable=False, default="")

    # NEW | REPEAT | NULL
    customer: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    services: Mapped[list["SaleService"]] = relationship(
        back_populates="sale",
        cascade="all, delete-orphan",
    )

    @property
    def provision(self) -> Decimal:
        """
        Commission earned on this sale: revenue * provision% summed over the
        attached services. Requires `services` and `services.service` loaded.
        """
        total = Decimal("0")
        for item in self.services:
            total += Decimal(self.revenue) * Decimal(item.service.provision) / Decimal(100)
        return total.quantize(Decimal("0.01"))


class SaleService(Base):
    __tablename__ = "sale_services"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    sale_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("sales.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    service_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("services.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    # one-off vs recurring label
    subscription: Mapped[str] = mapped_column(String(64), nullable=False, default="")

    sale: Mapped[Sale] = relationship(back_populates="services")
    service: Mapped["Service"] = relationship(back_populates="sales")
