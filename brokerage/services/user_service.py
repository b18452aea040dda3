"""
services/user_service.py
------------------------
Business logic for user registration, authentication, and listing.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from brokerage.core.exceptions import Conflict
from brokerage.core.logging import get_logger
from brokerage.core.security import hash_password, verify_password
from brokerage.models.user import User, UserRole
from brokerage.schemas.user import UserCreate, UserRegister

logger = get_logger(__name__)


class UserService:

    @staticmethod
    async def _insert(db: AsyncSession, user: User) -> User:
        email = user.email
        db.add(user)
        try:
            await db.flush()
            await db.refresh(user)
        except IntegrityError:
            await db.rollback()
            raise Conflict(f"Email '{email}' is already registered")
        return user

    @staticmethod
    async def register_user(db: AsyncSession, data: UserRegister) -> User:
        """
        Self-registration: creates a company-less 'user'-role account.
        Raises Conflict on duplicate email.
        """
        user = await UserService._insert(
            db,
            User(
                email=data.email.lower(),
                hashed_password=hash_password(data.password),
                role=UserRole.user.value,
            ),
        )
        logger.info("User registered", user_id=user.id)
        return user

    @staticmethod
    async def create_user_by_admin(
        db: AsyncSession,
        data: UserCreate,
        company_id: str,
    ) -> User:
        """Admin-initiated user creation within their own company."""
        user = await UserService._insert(
            db,
            User(
                email=data.email.lower(),
                hashed_password=hash_password(data.password),
                role=data.role.value,
                company_id=company_id,
            ),
        )
        logger.info(
            "Admin created user",
            new_user_id=user.id,
            role=user.role,
            company_id=company_id,
        )
        return user

    @staticmethod
    async def authenticate(
        db: AsyncSession, email: str, password: str
    ) -> Optional[User]:
        """
        Verify credentials and return the User if valid, else None.
        Email lookup is case-insensitive.
        """
        result = await db.execute(
            select(User).where(User.email == email.lower())
        )
        user = result.scalar_one_or_none()
        if user is None or not verify_password(password, user.hashed_password):
            return None
        return user

    @staticmethod
    async def list_users_in_company(
        db: AsyncSession, company_id: str
    ) -> list[User]:
        result = await db.execute(
            select(User).where(User.company_id == company_id).order_by(User.created_at)
        )
        return list(result.scalars().all())
