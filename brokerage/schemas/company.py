"""
schemas/company.py
------------------
Pydantic request/response models for Company.

Naming convention:
  CompanyCreate   → company fields
  CompanyOnboard  → inbound onboarding body (company + first admin)
  CompanyRead     → outbound response body
  CompanySummary  → denormalised display fields embedded in other records
"""

import re
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

_SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


class CompanyCreate(BaseModel):
    name: str = Field(
        ...,
        min_length=2,
        max_length=255,
        examples=["B Corp Imóveis"],
    )
    slug: str = Field(
        ...,
        min_length=2,
        max_length=100,
        examples=["b-corp"],
        description="Public handle; lowercase letters, digits and dashes",
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @field_validator("slug")
    @classmethod
    def normalise_slug(cls, v: str) -> str:
        v = v.strip().lower()
        if not _SLUG_RE.match(v):
            raise ValueError("slug may only contain lowercase letters, digits and dashes")
        return v


class CompanySummary(BaseModel):
    id: str
    name: str
    slug: str

    model_config = {"from_attributes": True}


class CompanyRead(CompanySummary):
    is_active: bool
    created_at: datetime


class CompanyOnboard(CompanyCreate):
    """Public onboarding body: the company plus credentials for its first admin."""
    admin_email: EmailStr
    admin_password: str = Field(..., min_length=8, max_length=72)
