"""
services/property_service.py
----------------------------
Property directory: a company's own listings.

Every query is scoped by company_id. Listings belonging to partners are
reached only through accepted shares (see visibility_service).
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from brokerage.core.exceptions import Forbidden, NotFound
from brokerage.core.logging import get_logger
from brokerage.models.property import Property
from brokerage.schemas.property import PropertyCreate, PropertyUpdate

logger = get_logger(__name__)


class PropertyService:

    @staticmethod
    async def create_property(
        db: AsyncSession, company_id: str, data: PropertyCreate
    ) -> Property:
        listing = Property(company_id=company_id, **data.model_dump())
        db.add(listing)
        await db.flush()
        await db.refresh(listing)
        logger.info("Property created", property_id=listing.id, company_id=company_id)
        return listing

    @staticmethod
    async def get_owned(
        db: AsyncSession, property_id: str, company_id: str
    ) -> Property:
        """
        Load a property and check that `company_id` owns it.
        Raises NotFound for an unknown id, Forbidden for someone else's listing.
        """
        listing = await db.get(Property, property_id)
        if listing is None:
            raise NotFound(f"Property '{property_id}' not found")
        if listing.company_id != company_id:
            raise Forbidden("Property belongs to another company")
        return listing

    @staticmethod
    async def update_property(
        db: AsyncSession,
        property_id: str,
        company_id: str,
        data: PropertyUpdate,
    ) -> Property:
        listing = await PropertyService.get_owned(db, property_id, company_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(listing, field, value)
        await db.flush()
        await db.refresh(listing)
        logger.info("Property updated", property_id=listing.id, company_id=company_id)
        return listing

    @staticmethod
    async def list_properties(db: AsyncSession, company_id: str) -> list[Property]:
        result = await db.execute(
            select(Property)
            .where(Property.company_id == company_id)
            .order_by(Property.created_at.desc(), Property.id.desc())
        )
        return list(result.scalars().all())
