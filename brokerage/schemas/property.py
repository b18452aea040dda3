"""
schemas/property.py
-------------------
Pydantic models for the property directory and the visibility feed.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from brokerage.models.property import PropertyPurpose, PropertyStatus


class PropertyCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=2, max_length=2, examples=["SP"])
    purpose: PropertyPurpose = PropertyPurpose.sale
    price: Optional[Decimal] = Field(default=None, ge=0)
    status: PropertyStatus = PropertyStatus.available
    is_published: bool = True
    is_highlight: bool = False


class PropertyUpdate(BaseModel):
    """Partial update; only fields that are sent are changed."""
    title: Optional[str] = Field(default=None, min_length=3, max_length=255)
    price: Optional[Decimal] = Field(default=None, ge=0)
    status: Optional[PropertyStatus] = None
    is_published: Optional[bool] = None
    is_highlight: Optional[bool] = None


class PropertyRead(BaseModel):
    id: str
    company_id: str
    title: str
    city: str
    state: str
    purpose: PropertyPurpose
    price: Optional[Decimal]
    status: PropertyStatus
    is_published: bool
    is_highlight: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class VisiblePropertyRead(PropertyRead):
    """
    A row of a company's visibility projection.

    shared is True when the listing comes from an accepted share;
    is_highlight is then the partner's own highlight flag on the share.
    """
    shared: bool
    owner_company_id: str
    owner_name: str
    share_id: Optional[str] = None

    @classmethod
    def from_visible(cls, item) -> "VisiblePropertyRead":
        base = PropertyRead.model_validate(item.listing).model_dump()
        base.update(
            is_highlight=item.is_highlight,
            shared=item.shared,
            owner_company_id=item.listing.company_id,
            owner_name=item.listing.company.name,
            share_id=item.share.id if item.share is not None else None,
        )
        return cls.model_validate(base)


class PublicSiteRead(BaseModel):
    company_name: str
    company_slug: str
    total: int
    items: list[VisiblePropertyRead]
