# salesboard/schemas/integrations.py
"""
Inbound webhook bodies from the Cling quoting tool. Field names follow the
sender's camelCase payload.
"""
from __future__ import annotations

import datetime as dt
import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

CREATED_AT_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T([01]\d|2[0-3]):[0-5]\d")


class ClingCompanyUser(BaseModel):
    email: str


class ClingClient(BaseModel):
    name: str


class ClingArticle(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # öre
    total_amount: int = Field(default=0, alias="totalAmount")


class ClingTemplate(BaseModel):
    name: str


class ClingDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    company_user: ClingCompanyUser = Field(alias="companyUser")
    clients: List[ClingClient] = Field(default_factory=list)
    # ISO timestamp, e.g. 2026-10-19T09:30:12.000Z
    created_at: str = Field(alias="createdAt")
    articles: List[ClingArticle] = Field(default_factory=list)
    template: Optional[ClingTemplate] = None

    @field_validator("created_at")
    @classmethod
    def validate_created_at(cls, v: str) -> str:
        if not CREATED_AT_PATTERN.match(v):
            raise ValueError("createdAt must look like YYYY-MM-DDTHH:MM...")
        dt.date.fromisoformat(v[:10])
        return v

    @property
    def record_date(self) -> dt.date:
        return dt.date.fromisoformat(self.created_at.split("T")[0])

    @property
    def record_time(self) -> str:
        return self.created_at.split("T")[1][:5]

    @property
    def client_names(self) -> str:
        return ", ".join(c.name for c in self.clients)

    @property
    def revenue_sek(self) -> int:
        return sum(a.total_amount for a in self.articles) // 100


class ClingWebhook(BaseModel):
    model_config = ConfigDict(extra="ignore")

    data: ClingDocument


class ClingWebhookResult(BaseModel):
    status: str
    record_id: Optional[str] = None
