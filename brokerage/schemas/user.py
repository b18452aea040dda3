"""
schemas/user.py
---------------
Pydantic models for User registration, login, and responses.

hashed_password is never part of any response schema.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from brokerage.models.user import UserRole


class UserCreate(BaseModel):
    """Used by an admin to create a new user within their company."""
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=72)
    role: UserRole = UserRole.user


class UserRegister(BaseModel):
    """
    Self-registration. The account starts without a company; it joins one
    only when an admin of that company creates it.
    """
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=72)


class UserRead(BaseModel):
    id: str
    email: str
    role: str
    company_id: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    user: UserRead
