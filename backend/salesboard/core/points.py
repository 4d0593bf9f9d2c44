# salesboard/core/points.py
"""
Points and leveling rules.

Every record a salesperson logs moves two numbers on their profile: the
all-time `points` score and the matching area counter (progress since the
last level-up). Handlers never do this arithmetic themselves; they ask this
module for a CounterDelta and apply it to the profile in the same transaction
as the record write.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Protocol


class RecordKind(str, enum.Enum):
    MEETING = "meeting"
    OFFER = "offer"
    SALE = "sale"
    BOOKING = "booking"


@dataclass(frozen=True)
class PointRule:
    points_per_unit: int
    counter: str  # Profile attribute holding the area counter


POINT_RULES: dict[RecordKind, PointRule] = {
    RecordKind.MEETING: PointRule(points_per_unit=1500, counter="meeting_count"),
    RecordKind.OFFER: PointRule(points_per_unit=3000, counter="offer_count"),
    RecordKind.SALE: PointRule(points_per_unit=1, counter="sale_count"),
    RecordKind.BOOKING: PointRule(points_per_unit=500, counter="booking_count"),
}

# Per-level requirement for each gating counter; required = base * level.
# booking_count is tracked but does not gate a level-up.
LEVEL_THRESHOLDS: dict[str, int] = {
    "meeting_count": 8,
    "offer_count": 6,
    "sale_count": 14000,
}


class Ledger(Protocol):
    points: int
    level: int
    meeting_count: int
    offer_count: int
    sale_count: int
    booking_count: int


def quantity_of(kind: RecordKind, record: Any) -> int:
    """
    Units a record contributes: one per meeting/booking, `amount` offers,
    `revenue` SEK for a sale.
    """
    if kind is RecordKind.OFFER:
        return int(record.amount)
    if kind is RecordKind.SALE:
        return int(record.revenue)
    return 1


@dataclass(frozen=True)
class CounterDelta:
    kind: RecordKind
    quantity: int

    @property
    def rule(self) -> PointRule:
        return POINT_RULES[self.kind]

    @property
    def points(self) -> int:
        return self.quantity * self.rule.points_per_unit

    @property
    def counter(self) -> str:
        return self.rule.counter

    @property
    def is_zero(self) -> bool:
        return self.quantity == 0


def delta_for_create(kind: RecordKind, quantity: int) -> CounterDelta:
    return CounterDelta(kind=kind, quantity=quantity)


def delta_for_update(kind: RecordKind, old_quantity: int, new_quantity: int) -> CounterDelta:
    """Only the difference is applied, so the caller must read the old record first."""
    return CounterDelta(kind=kind, quantity=new_quantity - old_quantity)


def delta_for_delete(kind: RecordKind, quantity: int) -> CounterDelta:
    return CounterDelta(kind=kind, quantity=-quantity)


def apply_delta(profile: Ledger, delta: CounterDelta) -> None:
    profile.points = (profile.points or 0) + delta.points
    setattr(profile, delta.counter, (getattr(profile, delta.counter) or 0) + delta.quantity)


# ---------------------------------------------------------
# Leveling
# ---------------------------------------------------------
@dataclass(frozen=True)
class AreaRequirement:
    counter: str
    current: int
    required: int

    @property
    def met(self) -> bool:
        return self.current >= self.required

    @property
    def progress(self) -> float:
        return self.current / self.required * 100 if self.required else 0.0


class LevelUpNotAllowed(Exception):
    def __init__(self, level: int, missing: list[AreaRequirement]):
        self.level = level
        self.missing = missing
        areas = ", ".join(f"{r.counter} {r.current}/{r.required}" for r in missing)
        super().__init__(f"Level {level} requirements not met: {areas}")


def level_requirements(profile: Ledger) -> list[AreaRequirement]:
    level = profile.level or 1
    return [
        AreaRequirement(counter=counter, current=getattr(profile, counter) or 0, required=base * level)
        for counter, base in LEVEL_THRESHOLDS.items()
    ]


def can_level_up(profile: Ledger) -> bool:
    return all(r.met for r in level_requirements(profile))


def level_up(profile: Ledger) -> int:
    """
    Consume one level's worth of each gating counter and bump the level.
    Surplus rolls over; points are not touched.
    Must be called with counters freshly read from the database.
    """
    requirements = level_requirements(profile)
    missing = [r for r in requirements if not r.met]
    if missing:
        raise LevelUpNotAllowed(level=profile.level, missing=missing)

    for r in requirements:
        setattr(profile, r.counter, r.current - r.required)
    profile.level = (profile.level or 1) + 1
    return profile.level
