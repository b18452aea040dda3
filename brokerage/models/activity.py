"""
models/activity.py
------------------
Append-only feed of partnership and sharing events.

One row per successful mutation, visible to both the acting company and
the counterpart. Rows are never updated.
"""

from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import Enum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from brokerage.db.base import Base, TimestampMixin, generate_uuid


class ActivityAction(str, PyEnum):
    partnership_requested = "partnership_requested"
    partnership_accepted = "partnership_accepted"
    partnership_rejected = "partnership_rejected"
    partnership_canceled = "partnership_canceled"
    property_shared = "property_shared"
    property_share_accepted = "property_share_accepted"
    property_share_rejected = "property_share_rejected"
    property_share_revoked = "property_share_revoked"
    property_share_deleted = "property_share_deleted"


class PartnershipActivity(Base, TimestampMixin):
    __tablename__ = "partnership_activity"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    action: Mapped[ActivityAction] = mapped_column(
        Enum(
            ActivityAction,
            native_enum=False,
            length=40,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
    )
    actor_company_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    target_company_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    partnership_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("partnerships.id", ondelete="SET NULL"), nullable=True
    )
    share_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("property_shares.id", ondelete="SET NULL"), nullable=True
    )

    def __repr__(self) -> str:
        return f"<PartnershipActivity id={self.id} action={self.action}>"
