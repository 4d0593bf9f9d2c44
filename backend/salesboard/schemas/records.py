# salesboard/schemas/records.py
"""
Request and response bodies for meetings, offers, sales and bookings.

Writes answer with a `*Out` model (the stored row). Reads answer with a
`*Summary` model: monthly totals plus the current month's rows.
"""
from __future__ import annotations

import datetime as dt
import uuid
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from salesboard.core.roles import CustomerType
from salesboard.core.windows import change_direction, percent_change

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$"


def normalize_name(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    v = " ".join(value.strip().split())
    if not v:
        raise ValueError("name must not be blank")
    return v


# ---------------------------------------------------------
# Shared
# ---------------------------------------------------------
class RecordCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=255)
    date: dt.date
    time: str = Field(pattern=TIME_PATTERN)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return normalize_name(v)


class RecordUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    date: Optional[dt.date] = None
    time: Optional[str] = Field(default=None, pattern=TIME_PATTERN)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return normalize_name(v)


class ProfileBrief(BaseModel):
    id: uuid.UUID
    name: str
    avatar: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class RecordOut(BaseModel):
    id: uuid.UUID
    name: str
    date: dt.date
    time: str
    profile_id: uuid.UUID
    created_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)


class MonthTotals(BaseModel):
    prev_month: int
    curr_month: int
    # percent, growth from zero reads as curr * 100
    change: float
    change_direction: str

    @classmethod
    def from_counts(cls, prev: int, curr: int, **extra):
        return cls(
            prev_month=prev,
            curr_month=curr,
            change=round(percent_change(prev, curr), 2),
            change_direction=change_direction(prev, curr),
            **extra,
        )


# ---------------------------------------------------------
# Meetings / bookings
# ---------------------------------------------------------
class MeetingCreate(RecordCreate):
    pass


class MeetingUpdate(RecordUpdate):
    pass


class MeetingOut(RecordOut):
    pass


class MeetingItem(MeetingOut):
    profile: ProfileBrief


class MeetingSummary(MonthTotals):
    meetings: List[MeetingItem]


class BookingCreate(RecordCreate):
    pass


class BookingUpdate(RecordUpdate):
    pass


class BookingOut(RecordOut):
    pass


class BookingItem(BookingOut):
    profile: ProfileBrief


class BookingSummary(MonthTotals):
    bookings: List[BookingItem]


# ---------------------------------------------------------
# Offers
# ---------------------------------------------------------
class OfferCreate(RecordCreate):
    amount: int = Field(default=1, ge=1, le=5)


class OfferUpdate(RecordUpdate):
    amount: Optional[int] = Field(default=None, ge=1, le=5)


class OfferOut(RecordOut):
    amount: int


class OfferItem(OfferOut):
    profile: ProfileBrief


class OfferSummary(MonthTotals):
    offers: List[OfferItem]


# ---------------------------------------------------------
# Sales
# ---------------------------------------------------------
class SaleServiceIn(BaseModel):
    service_id: uuid.UUID
    subscription: str = Field(default="", max_length=64)


class SaleCreate(RecordCreate):
    amount: int = Field(default=1, ge=1, le=5)
    revenue: int = Field(ge=0)
    invoice: str = Field(default="", max_length=64)
    customer: Optional[CustomerType] = None
    services: List[SaleServiceIn] = Field(default_factory=list)


class SaleUpdate(RecordUpdate):
    amount: Optional[int] = Field(default=None, ge=1, le=5)
    revenue: Optional[int] = Field(default=None, ge=0)
    invoice: Optional[str] = Field(default=None, max_length=64)
    customer: Optional[CustomerType] = None
    # replaces the line-items when present
    services: Optional[List[SaleServiceIn]] = None


class ServiceBrief(BaseModel):
    id: uuid.UUID
    name: str
    provision: str

    model_config = ConfigDict(from_attributes=True)


class SaleServiceOut(BaseModel):
    service_id: uuid.UUID
    subscription: str
    service: ServiceBrief

    model_config = ConfigDict(from_attributes=True)


class SaleOut(RecordOut):
    amount: int
    revenue: int
    invoice: str
    customer: Optional[CustomerType] = None
    services: List[SaleServiceOut] = Field(default_factory=list)
    provision: Decimal


class SaleItem(SaleOut):
    profile: ProfileBrief


class SaleSummary(MonthTotals):
    highest: Optional[SaleItem] = None
    sales: List[SaleItem]
