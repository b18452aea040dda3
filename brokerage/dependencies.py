"""
dependencies.py
---------------
FastAPI dependency injection functions for authentication and company scope.

Flow:
  1. OAuth2PasswordBearer extracts the Bearer token from the Authorization header.
  2. decode_access_token validates and parses the JWT.
  3. get_current_user reloads the User, rejecting tokens whose company_id
     no longer matches the persisted record.
  4. get_current_company_id hands services the acting company id as a plain
     parameter; users without a company get NoCompany.
"""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from brokerage.core.exceptions import NoCompany
from brokerage.core.logging import get_logger
from brokerage.core.security import decode_access_token
from brokerage.db.session import get_db
from brokerage.models.user import User, UserRole

logger = get_logger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/login")

_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """
    Decode the JWT, then load and return the full User from the database.
    Raises 401 if the token is invalid or the user no longer exists.
    """
    try:
        payload = decode_access_token(token)
    except JWTError as exc:
        logger.warning("JWT decode failed", error=str(exc))
        raise _CREDENTIALS_EXCEPTION

    user_id: Optional[str] = payload.get("sub")
    if not user_id:
        raise _CREDENTIALS_EXCEPTION

    user = await db.get(User, user_id)
    if user is None or user.company_id != payload.get("company_id"):
        logger.warning("User from valid JWT not found or moved company", user_id=user_id)
        raise _CREDENTIALS_EXCEPTION

    return user


async def get_current_admin(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    if current_user.role != UserRole.admin.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
    return current_user


async def get_current_company_id(
    current_user: Annotated[User, Depends(get_current_user)],
) -> str:
    """Acting company for mutations; raises NoCompany when unset."""
    if current_user.company_id is None:
        raise NoCompany()
    return current_user.company_id


async def get_optional_company_id(
    current_user: Annotated[User, Depends(get_current_user)],
) -> Optional[str]:
    """Company scope for listings; None means "nothing to list"."""
    return current_user.company_id
