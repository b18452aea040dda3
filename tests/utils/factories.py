"""Test data factories using Faker."""

from typing import Optional

from faker import Faker
from sqlalchemy.ext.asyncio import AsyncSession

from brokerage.models.company import Company
from brokerage.models.partnership import Partnership
from brokerage.models.property import Property, PropertyStatus
from brokerage.schemas.company import CompanyCreate
from brokerage.schemas.property import PropertyCreate
from brokerage.services.company_service import CompanyService
from brokerage.services.partnership_service import PartnershipService
from brokerage.services.property_service import PropertyService

fake = Faker()


async def create_company(db: AsyncSession, slug: Optional[str] = None) -> Company:
    slug = slug or f"{fake.slug()}-{fake.random_int(min=1000, max=9999)}"
    return await CompanyService.create_company(
        db, CompanyCreate(name=fake.company(), slug=slug)
    )


async def create_property(
    db: AsyncSession,
    company: Company,
    status: PropertyStatus = PropertyStatus.available,
    is_published: bool = True,
) -> Property:
    return await PropertyService.create_property(
        db,
        company.id,
        PropertyCreate(
            title=f"{fake.street_name()} {fake.building_number()}",
            city=fake.city()[:100],
            state="SP",
            price=fake.random_int(min=100_000, max=2_000_000),
            status=status,
            is_published=is_published,
        ),
    )


async def create_accepted_partnership(
    db: AsyncSession, requester: Company, partner: Company
) -> Partnership:
    partnership = await PartnershipService.request(db, requester.id, partner.slug)
    return await PartnershipService.accept(db, partnership.id, partner.id)
