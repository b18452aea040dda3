"""
api/routes/properties.py
------------------------
Property directory and visibility endpoints.

POST  /properties                 — Create a listing for the caller's company.
GET   /properties                 — The caller's own listings.
PATCH /properties/{property_id}   — Update title, price, status or flags.
GET   /visibility                 — The caller's visibility projection.
GET   /public/{slug}/properties   — Public site feed (no authentication).
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from brokerage.db.session import get_db
from brokerage.dependencies import get_current_company_id, get_optional_company_id
from brokerage.schemas.property import (
    PropertyCreate,
    PropertyRead,
    PropertyUpdate,
    PublicSiteRead,
    VisiblePropertyRead,
)
from brokerage.services.property_service import PropertyService
from brokerage.services.visibility_service import VisibilityService

router = APIRouter(tags=["Properties"])


@router.post(
    "/properties",
    response_model=PropertyRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a property listing",
)
async def create_property(
    body: PropertyCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    company_id: Annotated[str, Depends(get_current_company_id)],
) -> PropertyRead:
    listing = await PropertyService.create_property(db, company_id, body)
    return PropertyRead.model_validate(listing)


@router.get(
    "/properties",
    response_model=list[PropertyRead],
    summary="List the caller's own properties",
)
async def list_properties(
    db: Annotated[AsyncSession, Depends(get_db)],
    company_id: Annotated[Optional[str], Depends(get_optional_company_id)],
) -> list[PropertyRead]:
    if company_id is None:
        return []
    listings = await PropertyService.list_properties(db, company_id)
    return [PropertyRead.model_validate(p) for p in listings]


@router.patch(
    "/properties/{property_id}",
    response_model=PropertyRead,
    summary="Update a property owned by the caller",
)
async def update_property(
    property_id: str,
    body: PropertyUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    company_id: Annotated[str, Depends(get_current_company_id)],
) -> PropertyRead:
    listing = await PropertyService.update_property(db, property_id, company_id, body)
    return PropertyRead.model_validate(listing)


@router.get(
    "/visibility",
    response_model=list[VisiblePropertyRead],
    summary="Own listings plus accepted shares, as the caller's site sees them",
)
async def my_visibility(
    db: Annotated[AsyncSession, Depends(get_db)],
    company_id: Annotated[Optional[str], Depends(get_optional_company_id)],
    public_only: bool = Query(
        default=True,
        description="Only published listings whose status is 'available'",
    ),
) -> list[VisiblePropertyRead]:
    if company_id is None:
        return []
    items = await VisibilityService.visible_properties(db, company_id, public_only)
    return [VisiblePropertyRead.from_visible(item) for item in items]


@router.get(
    "/public/{slug}/properties",
    response_model=PublicSiteRead,
    summary="Public site feed for a company",
)
async def public_site_properties(
    slug: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PublicSiteRead:
    """No authentication: this is what the public site renderer consumes."""
    company, items = await VisibilityService.public_site(db, slug)
    return PublicSiteRead(
        company_name=company.name,
        company_slug=company.slug,
        total=len(items),
        items=[VisiblePropertyRead.from_visible(item) for item in items],
    )
