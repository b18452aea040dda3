"""
services/share_service.py
-------------------------
Property share registry.

A share can only be created by the property's owner, towards a company it
holds an accepted partnership with. The partner accepts or rejects it;
only the owner can revoke it once accepted. An accepted share makes the
property part of the partner's visibility projection on the next read.

The receiving company also owns two flags on an accepted share
(is_highlight, is_active) and may delete any share that is no longer pending.
"""

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from brokerage.core.exceptions import (
    Conflict,
    Forbidden,
    InvalidState,
    NotFound,
    PartnershipRequired,
    SelfReference,
)
from brokerage.core.logging import get_logger
from brokerage.models.activity import ActivityAction
from brokerage.models.property_share import (
    OPEN_SHARE_STATUSES,
    PropertyShare,
    ShareStatus,
)
from brokerage.services.activity_service import ActivityService
from brokerage.services.company_service import CompanyService
from brokerage.services.partnership_service import PartnershipService
from brokerage.services.property_service import PropertyService
from brokerage.services.transitions import SHARE_TRANSITIONS, apply_transition, next_status

logger = get_logger(__name__)

_ACTIVITY = {
    "accept": ActivityAction.property_share_accepted,
    "reject": ActivityAction.property_share_rejected,
    "revoke": ActivityAction.property_share_revoked,
}


class PropertyShareService:

    # ── Mutations ────────────────────────────────────────────────────────────

    @staticmethod
    async def share(
        db: AsyncSession,
        property_id: str,
        owner_company_id: str,
        partner_company_id: str,
    ) -> PropertyShare:
        """
        Offer `property_id` to `partner_company_id`.

        Raises:
            NotFound: unknown property or partner company.
            Forbidden: the owner does not own the property.
            SelfReference: owner and partner are the same company.
            PartnershipRequired: no accepted partnership links the two.
            Conflict: a pending or accepted share already exists for the
                property and partner.
        """
        listing = await PropertyService.get_owned(db, property_id, owner_company_id)
        if partner_company_id == owner_company_id:
            raise SelfReference("A company cannot share a property with itself")
        await CompanyService.require_by_id(db, partner_company_id)

        partnership = await PartnershipService.get_accepted_between(
            db, owner_company_id, partner_company_id
        )
        if partnership is None:
            raise PartnershipRequired(
                "An accepted partnership is required before sharing properties"
            )

        existing = await db.execute(
            select(PropertyShare.id).where(
                PropertyShare.property_id == listing.id,
                PropertyShare.partner_company_id == partner_company_id,
                PropertyShare.status.in_(OPEN_SHARE_STATUSES),
            )
        )
        if existing.first() is not None:
            raise Conflict("This property is already shared with that partner")

        share = PropertyShare(
            property_id=listing.id,
            owner_company_id=owner_company_id,
            partner_company_id=partner_company_id,
            status=ShareStatus.pending,
        )
        db.add(share)
        try:
            await db.flush()
        except IntegrityError:
            await db.rollback()
            raise Conflict("This property is already shared with that partner")
        await db.refresh(share)

        await ActivityService.record(
            db,
            ActivityAction.property_shared,
            actor_company_id=owner_company_id,
            target_company_id=partner_company_id,
            partnership_id=partnership.id,
            share_id=share.id,
        )
        logger.info(
            "Property shared",
            share_id=share.id,
            property_id=listing.id,
            owner_company_id=owner_company_id,
            partner_company_id=partner_company_id,
        )
        return share

    @staticmethod
    async def accept(
        db: AsyncSession, share_id: str, acting_company_id: str
    ) -> PropertyShare:
        share = await PropertyShareService._get_as_partner(db, share_id, acting_company_id)
        return await PropertyShareService._transition(db, share, acting_company_id, "accept")

    @staticmethod
    async def reject(
        db: AsyncSession, share_id: str, acting_company_id: str
    ) -> PropertyShare:
        share = await PropertyShareService._get_as_partner(db, share_id, acting_company_id)
        return await PropertyShareService._transition(db, share, acting_company_id, "reject")

    @staticmethod
    async def revoke(
        db: AsyncSession, share_id: str, acting_company_id: str
    ) -> PropertyShare:
        share = await PropertyShareService._get(db, share_id)
        if acting_company_id != share.owner_company_id:
            raise Forbidden("Only the owner may revoke a share")
        return await PropertyShareService._transition(db, share, acting_company_id, "revoke")

    @staticmethod
    async def toggle_highlight(
        db: AsyncSession, share_id: str, acting_company_id: str
    ) -> PropertyShare:
        """Flip the partner-side highlight flag of an accepted share."""
        return await PropertyShareService._toggle_flag(
            db, share_id, acting_company_id, "is_highlight"
        )

    @staticmethod
    async def toggle_active(
        db: AsyncSession, share_id: str, acting_company_id: str
    ) -> PropertyShare:
        """
        Hide or restore an accepted share on the partner's public site.

        The share stays accepted either way; only the public projection
        looks at is_active.
        """
        return await PropertyShareService._toggle_flag(
            db, share_id, acting_company_id, "is_active"
        )

    @staticmethod
    async def _toggle_flag(
        db: AsyncSession, share_id: str, acting_company_id: str, flag: str
    ) -> PropertyShare:
        share = await PropertyShareService._get_as_partner(db, share_id, acting_company_id)
        if share.status != ShareStatus.accepted:
            raise InvalidState(f"Only accepted shares can change {flag}")
        setattr(share, flag, not getattr(share, flag))
        await db.flush()
        await db.refresh(share)
        logger.info("Share flag toggled", share_id=share.id, flag=flag, value=getattr(share, flag))
        return share

    @staticmethod
    async def delete(db: AsyncSession, share_id: str, acting_company_id: str) -> None:
        """
        Remove a received share from both companies' lists.

        Raises:
            NotFound: unknown share.
            Forbidden: the caller is not the receiving company.
            InvalidState: the share is still pending (reject it instead), or
                its status changed concurrently.
        """
        share = await PropertyShareService._get_as_partner(db, share_id, acting_company_id)
        if share.status == ShareStatus.pending:
            raise InvalidState("A pending share must be rejected, not deleted")

        owner_company_id = share.owner_company_id
        result = await db.execute(
            delete(PropertyShare).where(
                PropertyShare.id == share.id,
                PropertyShare.status == share.status,
            )
        )
        if result.rowcount != 1:
            logger.warning("Share delete lost a race", share_id=share_id)
            raise InvalidState("Share changed while it was being deleted")

        await ActivityService.record(
            db,
            ActivityAction.property_share_deleted,
            actor_company_id=acting_company_id,
            target_company_id=owner_company_id,
        )
        logger.info("Share deleted", share_id=share_id, company_id=acting_company_id)

    @staticmethod
    async def _transition(
        db: AsyncSession, share: PropertyShare, acting_company_id: str, event: str
    ) -> PropertyShare:
        target = next_status(SHARE_TRANSITIONS, share.status, event)
        await apply_transition(db, PropertyShare, share.id, share.status, target)
        await db.refresh(share)

        counterpart_id = (
            share.owner_company_id
            if acting_company_id == share.partner_company_id
            else share.partner_company_id
        )
        await ActivityService.record(
            db,
            _ACTIVITY[event],
            actor_company_id=acting_company_id,
            target_company_id=counterpart_id,
            share_id=share.id,
        )
        logger.info(
            "Share status changed",
            share_id=share.id,
            status=share.status.value,
            company_id=acting_company_id,
        )
        return share

    @staticmethod
    async def _get(db: AsyncSession, share_id: str) -> PropertyShare:
        share = await db.get(PropertyShare, share_id)
        if share is None:
            raise NotFound(f"Share '{share_id}' not found")
        return share

    @staticmethod
    async def _get_as_partner(
        db: AsyncSession, share_id: str, acting_company_id: str
    ) -> PropertyShare:
        share = await PropertyShareService._get(db, share_id)
        if acting_company_id != share.partner_company_id:
            raise Forbidden("Only the receiving company may respond to this share")
        return share

    # ── Reads ────────────────────────────────────────────────────────────────

    @staticmethod
    async def list_sent(db: AsyncSession, company_id: str) -> list[PropertyShare]:
        return await PropertyShareService._list(
            db, PropertyShare.owner_company_id == company_id
        )

    @staticmethod
    async def list_received(db: AsyncSession, company_id: str) -> list[PropertyShare]:
        return await PropertyShareService._list(
            db, PropertyShare.partner_company_id == company_id
        )

    @staticmethod
    async def list_pending(db: AsyncSession, company_id: str) -> list[PropertyShare]:
        """Shares waiting for `company_id` to accept or reject."""
        return await PropertyShareService._list(
            db,
            PropertyShare.partner_company_id == company_id,
            PropertyShare.status == ShareStatus.pending,
        )

    @staticmethod
    async def _list(db: AsyncSession, *criteria) -> list[PropertyShare]:
        result = await db.execute(
            select(PropertyShare)
            .where(*criteria)
            .order_by(PropertyShare.created_at.desc(), PropertyShare.id.desc())
        )
        return list(result.scalars().all())
