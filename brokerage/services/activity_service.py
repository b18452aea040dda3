"""
services/activity_service.py
----------------------------
Partnership activity feed.
"""

from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from brokerage.models.activity import ActivityAction, PartnershipActivity


class ActivityService:

    @staticmethod
    async def record(
        db: AsyncSession,
        action: ActivityAction,
        actor_company_id: str,
        target_company_id: str,
        partnership_id: Optional[str] = None,
        share_id: Optional[str] = None,
    ) -> PartnershipActivity:
        entry = PartnershipActivity(
            action=action,
            actor_company_id=actor_company_id,
            target_company_id=target_company_id,
            partnership_id=partnership_id,
            share_id=share_id,
        )
        db.add(entry)
        await db.flush()
        await db.refresh(entry)
        return entry

    @staticmethod
    async def list_for_company(
        db: AsyncSession, company_id: str, limit: int = 50
    ) -> list[PartnershipActivity]:
        """Most recent events where the company acted or was acted upon."""
        result = await db.execute(
            select(PartnershipActivity)
            .where(
                or_(
                    PartnershipActivity.actor_company_id == company_id,
                    PartnershipActivity.target_company_id == company_id,
                )
            )
            .order_by(PartnershipActivity.created_at.desc(), PartnershipActivity.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
