"""
models/property_share.py
------------------------
Grant making one company's property visible on a partner company's site.

Only the owner creates and revokes; only the partner accepts, rejects,
hides (is_active) or deletes.
A partial unique index keeps at most one pending/accepted share per
(property, partner) pair.
"""

from enum import Enum as PyEnum

from sqlalchemy import Boolean, Enum, ForeignKey, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from brokerage.db.base import Base, TimestampMixin, generate_uuid


class ShareStatus(str, PyEnum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"
    revoked = "revoked"

    @property
    def is_terminal(self) -> bool:
        return self in (ShareStatus.rejected, ShareStatus.revoked)


OPEN_SHARE_STATUSES = (ShareStatus.pending, ShareStatus.accepted)

_OPEN_PREDICATE = text("status IN ('pending', 'accepted')")


class PropertyShare(Base, TimestampMixin):
    __tablename__ = "property_shares"
    __table_args__ = (
        Index(
            "uq_property_shares_open",
            "property_id",
            "partner_company_id",
            unique=True,
            postgresql_where=_OPEN_PREDICATE,
            sqlite_where=_OPEN_PREDICATE,
        ),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    property_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    owner_company_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    partner_company_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status: Mapped[ShareStatus] = mapped_column(
        Enum(
            ShareStatus,
            native_enum=False,
            length=20,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=ShareStatus.pending,
    )
    is_highlight: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Partner-side switch; an inactive share stays accepted but is not public
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    listing: Mapped["Property"] = relationship("Property", lazy="joined")  # noqa: F821
    owner: Mapped["Company"] = relationship(  # noqa: F821
        "Company", foreign_keys=[owner_company_id], lazy="joined"
    )
    partner: Mapped["Company"] = relationship(  # noqa: F821
        "Company", foreign_keys=[partner_company_id], lazy="joined"
    )

    def __repr__(self) -> str:
        return (
            f"<PropertyShare id={self.id} property_id={self.property_id} "
            f"partner={self.partner_company_id} status={self.status}>"
        )
