"""
schemas/partnership.py
----------------------
Pydantic models for partnerships, property shares and the activity feed.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from brokerage.models.activity import ActivityAction
from brokerage.models.partnership import PartnershipStatus
from brokerage.models.property_share import ShareStatus
from brokerage.schemas.company import CompanySummary


class PartnershipRequest(BaseModel):
    partner_slug: str = Field(..., min_length=1, max_length=100, examples=["b-corp"])
    share_all_properties: bool = Field(
        default=False,
        description="Announce that the requester intends to share its whole catalogue",
    )

    @field_validator("partner_slug")
    @classmethod
    def normalise_slug(cls, v: str) -> str:
        return v.strip().lower()


class PartnershipRead(BaseModel):
    id: str
    requester_company_id: str
    partner_company_id: str
    share_all_properties: bool
    status: PartnershipStatus
    requester: CompanySummary
    partner: CompanySummary
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ShareRequest(BaseModel):
    property_id: str
    partner_company_id: str


class ShareRead(BaseModel):
    id: str
    property_id: str
    property_title: str
    owner_company_id: str
    partner_company_id: str
    status: ShareStatus
    is_highlight: bool
    is_active: bool
    owner: CompanySummary
    partner: CompanySummary
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @classmethod
    def from_share(cls, share) -> "ShareRead":
        return cls.model_validate(
            {
                "id": share.id,
                "property_id": share.property_id,
                "property_title": share.listing.title,
                "owner_company_id": share.owner_company_id,
                "partner_company_id": share.partner_company_id,
                "status": share.status,
                "is_highlight": share.is_highlight,
                "is_active": share.is_active,
                "owner": CompanySummary.model_validate(share.owner),
                "partner": CompanySummary.model_validate(share.partner),
                "created_at": share.created_at,
                "updated_at": share.updated_at,
            }
        )


class ActivityRead(BaseModel):
    id: str
    action: ActivityAction
    actor_company_id: str
    target_company_id: str
    partnership_id: Optional[str]
    share_id: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}
