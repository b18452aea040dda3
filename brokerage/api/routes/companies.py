"""
api/routes/companies.py
-----------------------
Company onboarding endpoints.

POST /companies                 — Public endpoint to onboard a new brokerage and its admin.
GET  /companies/me              — The caller's company.
GET  /companies/{company_id}/users — Admin-only: list users in a company.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from brokerage.db.session import get_db
from brokerage.dependencies import get_current_admin, get_current_company_id
from brokerage.models.user import User
from brokerage.schemas.company import CompanyOnboard, CompanyRead
from brokerage.schemas.user import UserRead
from brokerage.services.company_service import CompanyService
from brokerage.services.user_service import UserService

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post(
    "",
    response_model=CompanyRead,
    status_code=status.HTTP_201_CREATED,
    summary="Onboard a new company",
)
async def create_company(
    body: CompanyOnboard,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CompanyRead:
    """The caller's credentials become the company's first admin account."""
    company, _ = await CompanyService.onboard(db, body)
    return CompanyRead.model_validate(company)


@router.get(
    "/me",
    response_model=CompanyRead,
    summary="Get the caller's company",
)
async def get_my_company(
    db: Annotated[AsyncSession, Depends(get_db)],
    company_id: Annotated[str, Depends(get_current_company_id)],
) -> CompanyRead:
    company = await CompanyService.require_by_id(db, company_id)
    return CompanyRead.model_validate(company)


@router.get(
    "/{company_id}/users",
    response_model=list[UserRead],
    summary="List all users in a company (admin only)",
)
async def list_company_users(
    company_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    admin: Annotated[User, Depends(get_current_admin)],
) -> list[UserRead]:
    """Admins can only list users of their own company."""
    if admin.company_id != company_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only view users within your own company",
        )
    users = await UserService.list_users_in_company(db, company_id)
    return [UserRead.model_validate(u) for u in users]
