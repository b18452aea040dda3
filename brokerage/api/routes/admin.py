"""
api/routes/admin.py
-------------------
Admin-only endpoints for user management within a company.

POST /admin/users  — Admin creates a new user (any role) in their company.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from brokerage.core.exceptions import NoCompany
from brokerage.db.session import get_db
from brokerage.dependencies import get_current_admin
from brokerage.models.user import User
from brokerage.schemas.user import UserCreate, UserRead
from brokerage.services.user_service import UserService

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/users",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Admin: create a new user in the current company",
)
async def admin_create_user(
    body: UserCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    admin: Annotated[User, Depends(get_current_admin)],
) -> UserRead:
    """The new user always joins the admin's own company."""
    if admin.company_id is None:
        raise NoCompany()
    user = await UserService.create_user_by_admin(
        db=db,
        data=body,
        company_id=admin.company_id,
    )
    return UserRead.model_validate(user)
