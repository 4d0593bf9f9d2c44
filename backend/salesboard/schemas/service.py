from __future__ import annotations

import uuid
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _normalize_provision(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    v = value.strip().replace(",", ".")
    try:
        d = Decimal(v)
    except InvalidOperation:
        raise ValueError("provision must be a decimal percentage, e.g. 12.5")
    if not d.is_finite() or d < 0 or d > 100:
        raise ValueError("provision must be between 0 and 100")
    return v


class ServiceCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=200)
    provision: str = Field(default="0", max_length=16)

    @field_validator("provision")
    @classmethod
    def validate_provision(cls, v: str) -> str:
        return _normalize_provision(v)


class ServiceUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    provision: Optional[str] = Field(default=None, max_length=16)

    @field_validator("provision")
    @classmethod
    def validate_provision(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_provision(v)


class ServiceOut(BaseModel):
    id: uuid.UUID
    name: str
    provision: str

    model_config = ConfigDict(from_attributes=True)


class ServiceUsageOut(ServiceOut):
    sales_count: int


class ServiceListOut(BaseModel):
    services: List[ServiceUsageOut]
