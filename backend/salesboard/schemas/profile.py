# salesboard/schemas/profile.py
from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from salesboard.schemas.records import MonthTotals, normalize_name


class ProfileOut(BaseModel):
    id: uuid.UUID
    name: str
    email: str
    role: str
    active: bool
    avatar: Optional[str] = None

    points: int
    level: int
    meeting_count: int
    offer_count: int
    sale_count: int
    booking_count: int

    meeting_goal: int
    offer_goal: int
    sale_goal: int
    booking_goal: int

    model_config = ConfigDict(from_attributes=True)


class ProfileCreate(BaseModel):
    """Admin-only: create a salesperson account."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=200)
    email: EmailStr

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return normalize_name(v)


class ProfileSettingsUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    avatar: Optional[str] = Field(default=None, max_length=1024)

    meeting_goal: Optional[int] = Field(default=None, ge=1)
    offer_goal: Optional[int] = Field(default=None, ge=1)
    sale_goal: Optional[int] = Field(default=None, ge=1)
    booking_goal: Optional[int] = Field(default=None, ge=1)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return normalize_name(v)


class AreaStats(MonthTotals):
    goal: int
    # raw share of the goal, may exceed 100
    goal_progress: float
    # capped at 100 for progress bars
    goal_progress_display: float


class LevelRequirementOut(BaseModel):
    counter: str
    current: int
    required: int
    met: bool
    progress: float

    model_config = ConfigDict(from_attributes=True)


class LevelStatus(BaseModel):
    level: int
    eligible: bool
    requirements: List[LevelRequirementOut]


class ProfileStats(BaseModel):
    profile: ProfileOut
    window_start: datetime
    window_end: datetime

    meetings: AreaStats
    offers: AreaStats
    sales: AreaStats
    bookings: AreaStats

    level_up: LevelStatus


class LeaderboardEntry(BaseModel):
    id: uuid.UUID
    name: str
    avatar: Optional[str] = None
    points: int
    level: int

    model_config = ConfigDict(from_attributes=True)
