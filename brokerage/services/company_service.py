"""
services/company_service.py
---------------------------
Company directory: onboarding and slug/id resolution.

Service layer is responsible for:
  - Constructing queries
  - Enforcing business rules (e.g. unique slugs)
  - Returning domain objects (ORM models) to the route layer
  - Never returning HTTP responses (that's the route's job)
"""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from brokerage.core.exceptions import Conflict, NotFound
from brokerage.core.logging import get_logger
from brokerage.models.company import Company
from brokerage.models.user import User, UserRole
from brokerage.schemas.company import CompanyCreate, CompanyOnboard
from brokerage.schemas.user import UserCreate
from brokerage.services.user_service import UserService

logger = get_logger(__name__)


class CompanyService:

    @staticmethod
    async def create_company(db: AsyncSession, data: CompanyCreate) -> Company:
        """
        Create a new company.
        Raises Conflict if the slug is already taken.
        """
        company = Company(name=data.name, slug=data.slug)
        db.add(company)
        try:
            await db.flush()
            await db.refresh(company)
        except IntegrityError:
            await db.rollback()
            raise Conflict(f"Slug '{data.slug}' is already taken")
        logger.info("Company created", company_id=company.id, slug=company.slug)
        return company

    @staticmethod
    async def onboard(db: AsyncSession, data: CompanyOnboard) -> tuple[Company, User]:
        """
        Create a company together with its first admin, in one transaction.
        This is the only way a company gets its initial member; everyone
        after that is added by an admin of the company.
        """
        company = await CompanyService.create_company(db, data)
        admin = await UserService.create_user_by_admin(
            db,
            UserCreate(
                email=data.admin_email,
                password=data.admin_password,
                role=UserRole.admin,
            ),
            company_id=company.id,
        )
        return company, admin

    @staticmethod
    async def get_company_by_slug(db: AsyncSession, slug: str) -> Company | None:
        result = await db.execute(select(Company).where(Company.slug == slug.lower()))
        return result.scalar_one_or_none()

    @staticmethod
    async def require_by_slug(db: AsyncSession, slug: str) -> Company:
        """Resolve an active company by slug or raise NotFound."""
        company = await CompanyService.get_company_by_slug(db, slug)
        if company is None or not company.is_active:
            raise NotFound(f"Company '{slug}' not found")
        return company

    @staticmethod
    async def require_by_id(db: AsyncSession, company_id: str) -> Company:
        company = await db.get(Company, company_id)
        if company is None:
            raise NotFound(f"Company '{company_id}' not found")
        return company
