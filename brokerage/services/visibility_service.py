"""
services/visibility_service.py
------------------------------
Visibility projection: the properties a company's site should display.

    visible(C) = own properties of C
               ∪ properties shared to C by another company with an accepted share

Nothing here is persisted or cached; the projection is rebuilt on every
call from the current rows. With public_only the underlying property must
itself be published and available, whichever branch it comes from; a
share never overrides the owner's flags. A shared item also needs the
partner to keep the share active.

Ordering is created_at, then id, ascending, so repeated calls over the
same data return the same sequence.
"""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from brokerage.core.logging import get_logger
from brokerage.models.company import Company
from brokerage.models.property import Property, PropertyStatus
from brokerage.models.property_share import PropertyShare, ShareStatus
from brokerage.services.company_service import CompanyService

logger = get_logger(__name__)


@dataclass(frozen=True)
class VisibleProperty:
    listing: Property
    share: Optional[PropertyShare] = None

    @property
    def shared(self) -> bool:
        return self.share is not None

    @property
    def is_highlight(self) -> bool:
        if self.share is not None:
            return self.share.is_highlight
        return self.listing.is_highlight


def _public_filter(stmt, public_only: bool):
    if not public_only:
        return stmt
    return stmt.where(
        Property.is_published.is_(True),
        Property.status == PropertyStatus.available,
    )


class VisibilityService:

    @staticmethod
    async def visible_properties(
        db: AsyncSession, company_id: str, public_only: bool = True
    ) -> list[VisibleProperty]:
        own_stmt = _public_filter(
            select(Property).where(Property.company_id == company_id), public_only
        )
        own = (await db.execute(own_stmt)).scalars().all()

        shared_stmt = _public_filter(
            select(PropertyShare)
            .join(Property, PropertyShare.property_id == Property.id)
            .where(
                PropertyShare.partner_company_id == company_id,
                PropertyShare.status == ShareStatus.accepted,
                Property.company_id != company_id,
            ),
            public_only,
        )
        if public_only:
            shared_stmt = shared_stmt.where(PropertyShare.is_active.is_(True))
        shares = (await db.execute(shared_stmt)).scalars().all()

        items: dict[str, VisibleProperty] = {
            listing.id: VisibleProperty(listing=listing) for listing in own
        }
        for share in shares:
            items.setdefault(share.property_id, VisibleProperty(listing=share.listing, share=share))

        projection = sorted(
            items.values(), key=lambda item: (item.listing.created_at, item.listing.id)
        )
        logger.debug(
            "Visibility projected",
            company_id=company_id,
            public_only=public_only,
            own=len(own),
            shared=len(projection) - len(own),
        )
        return projection

    @staticmethod
    async def public_site(
        db: AsyncSession, slug: str
    ) -> tuple[Company, list[VisibleProperty]]:
        """Resolve an active company by slug and return its public feed."""
        company = await CompanyService.require_by_slug(db, slug)
        return company, await VisibilityService.visible_properties(
            db, company.id, public_only=True
        )
