"""
models/partnership.py
---------------------
Partnership between two brokerage companies.

The relation is symmetric in meaning but stored directionally: the
requester invites, and only the invited partner may accept or reject.
Once accepted, either side may cancel.

pair_key holds the unordered pair "<low id>:<high id>". A partial unique
index on it keeps at most one pending/accepted row per pair; rejected and
canceled rows are terminal and never block a new request.
"""

from enum import Enum as PyEnum

from sqlalchemy import Boolean, Enum, ForeignKey, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from brokerage.db.base import Base, TimestampMixin, generate_uuid


class PartnershipStatus(str, PyEnum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"
    canceled = "canceled"

    @property
    def is_terminal(self) -> bool:
        return self in (PartnershipStatus.rejected, PartnershipStatus.canceled)


OPEN_PARTNERSHIP_STATUSES = (PartnershipStatus.pending, PartnershipStatus.accepted)

_OPEN_PREDICATE = text("status IN ('pending', 'accepted')")


def make_pair_key(company_a_id: str, company_b_id: str) -> str:
    low, high = sorted((company_a_id, company_b_id))
    return f"{low}:{high}"


class Partnership(Base, TimestampMixin):
    __tablename__ = "partnerships"
    __table_args__ = (
        Index(
            "uq_partnerships_open_pair",
            "pair_key",
            unique=True,
            postgresql_where=_OPEN_PREDICATE,
            sqlite_where=_OPEN_PREDICATE,
        ),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    requester_company_id: Mapped[str] = mapped_column(
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
    pair_key: Mapped[str] = mapped_column(String(73), nullable=False)
    # Requester's stated intent ("Auto" sharing); grants nothing, shares stay explicit
    share_all_properties: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    status: Mapped[PartnershipStatus] = mapped_column(
        Enum(
            PartnershipStatus,
            native_enum=False,
            length=20,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=PartnershipStatus.pending,
    )

    requester: Mapped["Company"] = relationship(  # noqa: F821
        "Company", foreign_keys=[requester_company_id], lazy="joined"
    )
    partner: Mapped["Company"] = relationship(  # noqa: F821
        "Company", foreign_keys=[partner_company_id], lazy="joined"
    )

    def involves(self, company_id: str) -> bool:
        return company_id in (self.requester_company_id, self.partner_company_id)

    def counterpart_of(self, company_id: str) -> "Company":  # noqa: F821
        return self.partner if company_id == self.requester_company_id else self.requester

    def __repr__(self) -> str:
        return (
            f"<Partnership id={self.id} {self.requester_company_id}->"
            f"{self.partner_company_id} status={self.status}>"
        )
