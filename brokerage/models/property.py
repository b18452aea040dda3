"""
models/property.py
------------------
Property listing owned by exactly one company.

A listing is public only while is_published is set and its status is
'available'. Shares never override these flags.
"""

from decimal import Decimal
from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import Boolean, Enum, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from brokerage.db.base import Base, TimestampMixin, generate_uuid


class PropertyStatus(str, PyEnum):
    available = "available"
    reserved = "reserved"
    sold = "sold"
    rented = "rented"
    inactive = "inactive"


class PropertyPurpose(str, PyEnum):
    sale = "sale"
    rent = "rent"
    sale_rent = "sale_rent"


class Property(Base, TimestampMixin):
    __tablename__ = "properties"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    company_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str] = mapped_column(String(2), nullable=False)
    purpose: Mapped[PropertyPurpose] = mapped_column(
        Enum(
            PropertyPurpose,
            native_enum=False,
            length=20,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=PropertyPurpose.sale,
    )
    price: Mapped[Optional[Decimal]] = mapped_column(Numeric(15, 2), nullable=True)
    status: Mapped[PropertyStatus] = mapped_column(
        Enum(
            PropertyStatus,
            native_enum=False,
            length=20,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=PropertyStatus.available,
    )
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_highlight: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    company: Mapped["Company"] = relationship(  # noqa: F821
        "Company", back_populates="properties", lazy="joined"
    )

    @property
    def is_public(self) -> bool:
        return self.is_published and self.status == PropertyStatus.available

    def __repr__(self) -> str:
        return f"<Property id={self.id} company_id={self.company_id} status={self.status}>"
