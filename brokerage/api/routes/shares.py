"""
api/routes/shares.py
--------------------
Property share endpoints.

GET  /shares/sent                — Shares the caller offered.
GET  /shares/received            — Shares offered to the caller.
GET  /shares/pending             — Offers waiting for the caller's answer.
POST /shares                     — Offer one of the caller's properties to a partner.
POST /shares/{id}/accept         — Receiving company accepts.
POST /shares/{id}/reject         — Receiving company rejects.
POST /shares/{id}/revoke         — Owner withdraws an accepted share.
POST /shares/{id}/highlight      — Receiving company toggles its highlight flag.
POST /shares/{id}/active         — Receiving company hides/restores it on its site.
DELETE /shares/{id}              — Receiving company removes the share.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from brokerage.db.session import get_db
from brokerage.dependencies import get_current_company_id, get_optional_company_id
from brokerage.schemas.partnership import ShareRead, ShareRequest
from brokerage.services.share_service import PropertyShareService

router = APIRouter(prefix="/shares", tags=["Property shares"])


@router.get("/sent", response_model=list[ShareRead])
async def list_sent_shares(
    db: Annotated[AsyncSession, Depends(get_db)],
    company_id: Annotated[Optional[str], Depends(get_optional_company_id)],
) -> list[ShareRead]:
    if company_id is None:
        return []
    return [ShareRead.from_share(s) for s in await PropertyShareService.list_sent(db, company_id)]


@router.get("/received", response_model=list[ShareRead])
async def list_received_shares(
    db: Annotated[AsyncSession, Depends(get_db)],
    company_id: Annotated[Optional[str], Depends(get_optional_company_id)],
) -> list[ShareRead]:
    if company_id is None:
        return []
    return [
        ShareRead.from_share(s)
        for s in await PropertyShareService.list_received(db, company_id)
    ]


@router.get("/pending", response_model=list[ShareRead])
async def list_pending_shares(
    db: Annotated[AsyncSession, Depends(get_db)],
    company_id: Annotated[Optional[str], Depends(get_optional_company_id)],
) -> list[ShareRead]:
    if company_id is None:
        return []
    return [
        ShareRead.from_share(s)
        for s in await PropertyShareService.list_pending(db, company_id)
    ]


@router.post(
    "",
    response_model=ShareRead,
    status_code=status.HTTP_201_CREATED,
    summary="Share a property with a partner company",
)
async def share_property(
    body: ShareRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    company_id: Annotated[str, Depends(get_current_company_id)],
) -> ShareRead:
    share = await PropertyShareService.share(
        db,
        property_id=body.property_id,
        owner_company_id=company_id,
        partner_company_id=body.partner_company_id,
    )
    return ShareRead.from_share(share)


@router.post("/{share_id}/accept", response_model=ShareRead)
async def accept_share(
    share_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    company_id: Annotated[str, Depends(get_current_company_id)],
) -> ShareRead:
    return ShareRead.from_share(await PropertyShareService.accept(db, share_id, company_id))


@router.post("/{share_id}/reject", response_model=ShareRead)
async def reject_share(
    share_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    company_id: Annotated[str, Depends(get_current_company_id)],
) -> ShareRead:
    return ShareRead.from_share(await PropertyShareService.reject(db, share_id, company_id))


@router.post("/{share_id}/revoke", response_model=ShareRead)
async def revoke_share(
    share_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    company_id: Annotated[str, Depends(get_current_company_id)],
) -> ShareRead:
    return ShareRead.from_share(await PropertyShareService.revoke(db, share_id, company_id))


@router.post("/{share_id}/highlight", response_model=ShareRead)
async def toggle_share_highlight(
    share_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    company_id: Annotated[str, Depends(get_current_company_id)],
) -> ShareRead:
    share = await PropertyShareService.toggle_highlight(db, share_id, company_id)
    return ShareRead.from_share(share)


@router.post("/{share_id}/active", response_model=ShareRead)
async def toggle_share_active(
    share_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    company_id: Annotated[str, Depends(get_current_company_id)],
) -> ShareRead:
    share = await PropertyShareService.toggle_active(db, share_id, company_id)
    return ShareRead.from_share(share)


@router.delete("/{share_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_share(
    share_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    company_id: Annotated[str, Depends(get_current_company_id)],
) -> None:
    await PropertyShareService.delete(db, share_id, company_id)
