"""
api/routes/partnerships.py
--------------------------
Partnership endpoints. The acting company always comes from the caller's
token; it is never accepted from the request body.

GET  /partnerships               — All partnerships involving the caller.
GET  /partnerships/pending       — Requests waiting for the caller's answer.
GET  /partnerships/accepted      — Active partnerships.
POST /partnerships               — Request a partnership by partner slug.
POST /partnerships/{id}/accept   — Invited company accepts.
POST /partnerships/{id}/reject   — Invited company rejects.
POST /partnerships/{id}/cancel   — Either side ends an accepted partnership.
GET  /activity                   — Partnership and sharing activity feed.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from brokerage.db.session import get_db
from brokerage.dependencies import get_current_company_id, get_optional_company_id
from brokerage.schemas.partnership import (
    ActivityRead,
    PartnershipRead,
    PartnershipRequest,
)
from brokerage.services.activity_service import ActivityService
from brokerage.services.partnership_service import PartnershipService

router = APIRouter(tags=["Partnerships"])


@router.get("/partnerships", response_model=list[PartnershipRead])
async def list_partnerships(
    db: Annotated[AsyncSession, Depends(get_db)],
    company_id: Annotated[Optional[str], Depends(get_optional_company_id)],
) -> list[PartnershipRead]:
    if company_id is None:
        return []
    rows = await PartnershipService.list_for_company(db, company_id)
    return [PartnershipRead.model_validate(p) for p in rows]


@router.get("/partnerships/pending", response_model=list[PartnershipRead])
async def list_pending_partnerships(
    db: Annotated[AsyncSession, Depends(get_db)],
    company_id: Annotated[Optional[str], Depends(get_optional_company_id)],
) -> list[PartnershipRead]:
    if company_id is None:
        return []
    rows = await PartnershipService.list_pending(db, company_id)
    return [PartnershipRead.model_validate(p) for p in rows]


@router.get("/partnerships/accepted", response_model=list[PartnershipRead])
async def list_accepted_partnerships(
    db: Annotated[AsyncSession, Depends(get_db)],
    company_id: Annotated[Optional[str], Depends(get_optional_company_id)],
) -> list[PartnershipRead]:
    if company_id is None:
        return []
    rows = await PartnershipService.list_accepted(db, company_id)
    return [PartnershipRead.model_validate(p) for p in rows]


@router.post(
    "/partnerships",
    response_model=PartnershipRead,
    status_code=status.HTTP_201_CREATED,
    summary="Request a partnership with another company",
)
async def request_partnership(
    body: PartnershipRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    company_id: Annotated[str, Depends(get_current_company_id)],
) -> PartnershipRead:
    partnership = await PartnershipService.request(
        db,
        requester_company_id=company_id,
        partner_slug=body.partner_slug,
        share_all_properties=body.share_all_properties,
    )
    return PartnershipRead.model_validate(partnership)


@router.post("/partnerships/{partnership_id}/accept", response_model=PartnershipRead)
async def accept_partnership(
    partnership_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    company_id: Annotated[str, Depends(get_current_company_id)],
) -> PartnershipRead:
    partnership = await PartnershipService.accept(db, partnership_id, company_id)
    return PartnershipRead.model_validate(partnership)


@router.post("/partnerships/{partnership_id}/reject", response_model=PartnershipRead)
async def reject_partnership(
    partnership_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    company_id: Annotated[str, Depends(get_current_company_id)],
) -> PartnershipRead:
    partnership = await PartnershipService.reject(db, partnership_id, company_id)
    return PartnershipRead.model_validate(partnership)


@router.post("/partnerships/{partnership_id}/cancel", response_model=PartnershipRead)
async def cancel_partnership(
    partnership_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    company_id: Annotated[str, Depends(get_current_company_id)],
) -> PartnershipRead:
    """Already accepted shares stay in place; revoke them separately."""
    partnership = await PartnershipService.cancel(db, partnership_id, company_id)
    return PartnershipRead.model_validate(partnership)


@router.get("/activity", response_model=list[ActivityRead], tags=["Activity"])
async def list_activity(
    db: Annotated[AsyncSession, Depends(get_db)],
    company_id: Annotated[Optional[str], Depends(get_optional_company_id)],
    limit: int = Query(default=50, ge=1, le=200),
) -> list[ActivityRead]:
    if company_id is None:
        return []
    entries = await ActivityService.list_for_company(db, company_id, limit=limit)
    return [ActivityRead.model_validate(e) for e in entries]
