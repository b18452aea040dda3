"""
models/user.py
--------------
User ORM model with roles and company binding.

Role design:
  - 'admin': Can manage users within their own company.
  - 'user':  Regular broker account.

company_id is nullable: an account can exist before it is attached to a
brokerage, but it cannot act on partnerships until it is.
"""

from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from brokerage.db.base import Base, TimestampMixin, generate_uuid


class UserRole(str, PyEnum):
    admin = "admin"
    user = "user"


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    email: Mapped[str] = mapped_column(
        String(320), unique=True, nullable=False, index=True
    )
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=UserRole.user.value
    )
    company_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("companies.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    company: Mapped[Optional["Company"]] = relationship(  # noqa: F821
        "Company", back_populates="users"
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email} role={self.role}>"
