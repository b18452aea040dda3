"""
models/company.py
-----------------
Company (brokerage tenant) ORM model.

Each company is an isolated organisational unit. Its slug is the public
handle: it names the company's public site and is what another company
types in to request a partnership.
"""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from brokerage.db.base import Base, TimestampMixin, generate_uuid


class Company(Base, TimestampMixin):
    __tablename__ = "companies"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Relationships
    users: Mapped[list["User"]] = relationship(  # noqa: F821
        "User", back_populates="company"
    )
    properties: Mapped[list["Property"]] = relationship(  # noqa: F821
        "Property", back_populates="company", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Company id={self.id} slug={self.slug}>"
