"""
services/partnership_service.py
-------------------------------
Partnership registry.

Authority is asymmetric:
  - only the invited partner may accept or reject a pending request;
  - either side may cancel an accepted partnership.

Canceling does not revoke shares already accepted under the partnership;
the owner revokes those individually.
"""

from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from brokerage.core.exceptions import Conflict, Forbidden, NotFound, SelfReference
from brokerage.core.logging import get_logger
from brokerage.models.activity import ActivityAction
from brokerage.models.partnership import (
    OPEN_PARTNERSHIP_STATUSES,
    Partnership,
    PartnershipStatus,
    make_pair_key,
)
from brokerage.services.activity_service import ActivityService
from brokerage.services.company_service import CompanyService
from brokerage.services.transitions import (
    PARTNERSHIP_TRANSITIONS,
    apply_transition,
    next_status,
)

logger = get_logger(__name__)

_ACTIVITY = {
    "accept": ActivityAction.partnership_accepted,
    "reject": ActivityAction.partnership_rejected,
    "cancel": ActivityAction.partnership_canceled,
}


class PartnershipService:

    # ── Mutations ────────────────────────────────────────────────────────────

    @staticmethod
    async def request(
        db: AsyncSession,
        requester_company_id: str,
        partner_slug: str,
        share_all_properties: bool = False,
    ) -> Partnership:
        """
        Invite the company behind `partner_slug` to a partnership.

        Raises:
            NotFound: no active company has that slug.
            SelfReference: the slug is the requester's own.
            Conflict: a pending or accepted partnership already links the pair,
                in either direction.
        """
        partner = await CompanyService.require_by_slug(db, partner_slug)
        if partner.id == requester_company_id:
            raise SelfReference("A company cannot partner with itself")

        partner_id, partner_slug = partner.id, partner.slug
        pair_key = make_pair_key(requester_company_id, partner_id)
        existing = await db.execute(
            select(Partnership.id).where(
                Partnership.pair_key == pair_key,
                Partnership.status.in_(OPEN_PARTNERSHIP_STATUSES),
            )
        )
        if existing.first() is not None:
            raise Conflict(f"A partnership with '{partner_slug}' already exists")

        partnership = Partnership(
            requester_company_id=requester_company_id,
            partner_company_id=partner_id,
            pair_key=pair_key,
            share_all_properties=share_all_properties,
            status=PartnershipStatus.pending,
        )
        db.add(partnership)
        try:
            await db.flush()
        except IntegrityError:
            # Lost a race against a concurrent request for the same pair.
            # The rollback expires `partner`, so only locals are read below.
            await db.rollback()
            raise Conflict(f"A partnership with '{partner_slug}' already exists")
        await db.refresh(partnership)

        await ActivityService.record(
            db,
            ActivityAction.partnership_requested,
            actor_company_id=requester_company_id,
            target_company_id=partner_id,
            partnership_id=partnership.id,
        )
        logger.info(
            "Partnership requested",
            partnership_id=partnership.id,
            requester_company_id=requester_company_id,
            partner_company_id=partner_id,
        )
        return partnership

    @staticmethod
    async def accept(
        db: AsyncSession, partnership_id: str, acting_company_id: str
    ) -> Partnership:
        return await PartnershipService._respond(
            db, partnership_id, acting_company_id, "accept"
        )

    @staticmethod
    async def reject(
        db: AsyncSession, partnership_id: str, acting_company_id: str
    ) -> Partnership:
        return await PartnershipService._respond(
            db, partnership_id, acting_company_id, "reject"
        )

    @staticmethod
    async def cancel(
        db: AsyncSession, partnership_id: str, acting_company_id: str
    ) -> Partnership:
        partnership = await PartnershipService._get(db, partnership_id)
        if not partnership.involves(acting_company_id):
            raise Forbidden("Only members of the partnership may cancel it")
        return await PartnershipService._transition(
            db, partnership, acting_company_id, "cancel"
        )

    @staticmethod
    async def _respond(
        db: AsyncSession, partnership_id: str, acting_company_id: str, event: str
    ) -> Partnership:
        partnership = await PartnershipService._get(db, partnership_id)
        if acting_company_id != partnership.partner_company_id:
            raise Forbidden("Only the invited company may respond to this request")
        return await PartnershipService._transition(
            db, partnership, acting_company_id, event
        )

    @staticmethod
    async def _transition(
        db: AsyncSession, partnership: Partnership, acting_company_id: str, event: str
    ) -> Partnership:
        target = next_status(PARTNERSHIP_TRANSITIONS, partnership.status, event)
        await apply_transition(db, Partnership, partnership.id, partnership.status, target)
        await db.refresh(partnership)

        counterpart = partnership.counterpart_of(acting_company_id)
        await ActivityService.record(
            db,
            _ACTIVITY[event],
            actor_company_id=acting_company_id,
            target_company_id=counterpart.id,
            partnership_id=partnership.id,
        )
        logger.info(
            "Partnership status changed",
            partnership_id=partnership.id,
            status=partnership.status.value,
            company_id=acting_company_id,
        )
        return partnership

    @staticmethod
    async def _get(db: AsyncSession, partnership_id: str) -> Partnership:
        partnership = await db.get(Partnership, partnership_id)
        if partnership is None:
            raise NotFound(f"Partnership '{partnership_id}' not found")
        return partnership

    # ── Reads ────────────────────────────────────────────────────────────────

    @staticmethod
    async def get_accepted_between(
        db: AsyncSession, company_a_id: str, company_b_id: str
    ) -> Optional[Partnership]:
        result = await db.execute(
            select(Partnership).where(
                Partnership.pair_key == make_pair_key(company_a_id, company_b_id),
                Partnership.status == PartnershipStatus.accepted,
            )
        )
        return result.scalars().first()

    @staticmethod
    async def list_for_company(db: AsyncSession, company_id: str) -> list[Partnership]:
        return await PartnershipService._list(
            db,
            or_(
                Partnership.requester_company_id == company_id,
                Partnership.partner_company_id == company_id,
            ),
        )

    @staticmethod
    async def list_pending(db: AsyncSession, company_id: str) -> list[Partnership]:
        """Requests waiting for `company_id` to respond."""
        return await PartnershipService._list(
            db,
            Partnership.partner_company_id == company_id,
            Partnership.status == PartnershipStatus.pending,
        )

    @staticmethod
    async def list_accepted(db: AsyncSession, company_id: str) -> list[Partnership]:
        return await PartnershipService._list(
            db,
            or_(
                Partnership.requester_company_id == company_id,
                Partnership.partner_company_id == company_id,
            ),
            Partnership.status == PartnershipStatus.accepted,
        )

    @staticmethod
    async def _list(db: AsyncSession, *criteria) -> list[Partnership]:
        result = await db.execute(
            select(Partnership)
            .where(*criteria)
            .order_by(Partnership.created_at.desc(), Partnership.id.desc())
        )
        return list(result.scalars().all())
