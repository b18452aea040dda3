"""
services/transitions.py
-----------------------
Status machines for partnerships and property shares, and the guarded
UPDATE that applies a transition.

Both machines have the same shape:

    pending --accept--> accepted --cancel/revoke--> terminal
    pending --reject--> rejected (terminal)

Every status is a key of its table, so a missing entry is a bug rather
than an implicit "no transitions". Terminal statuses map to {}.

The UPDATE is guarded by the status the caller observed. If another
request moved the row first, zero rows match and the caller gets
InvalidState instead of silently overwriting the winner.
"""

from typing import Dict, Mapping, Type, TypeVar

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from brokerage.core.exceptions import InvalidState
from brokerage.core.logging import get_logger
from brokerage.models.partnership import PartnershipStatus
from brokerage.models.property_share import ShareStatus

logger = get_logger(__name__)

S = TypeVar("S", PartnershipStatus, ShareStatus)

PARTNERSHIP_TRANSITIONS: Dict[PartnershipStatus, Dict[str, PartnershipStatus]] = {
    PartnershipStatus.pending: {
        "accept": PartnershipStatus.accepted,
        "reject": PartnershipStatus.rejected,
    },
    PartnershipStatus.accepted: {
        "cancel": PartnershipStatus.canceled,
    },
    PartnershipStatus.rejected: {},
    PartnershipStatus.canceled: {},
}

SHARE_TRANSITIONS: Dict[ShareStatus, Dict[str, ShareStatus]] = {
    ShareStatus.pending: {
        "accept": ShareStatus.accepted,
        "reject": ShareStatus.rejected,
    },
    ShareStatus.accepted: {
        "revoke": ShareStatus.revoked,
    },
    ShareStatus.rejected: {},
    ShareStatus.revoked: {},
}


def next_status(table: Mapping[S, Mapping[str, S]], current: S, event: str) -> S:
    """Return the status `event` leads to from `current`, or raise InvalidState."""
    target = table[current].get(event)
    if target is None:
        raise InvalidState(f"Cannot {event} from status '{current.value}'")
    return target


async def apply_transition(
    db: AsyncSession,
    model: Type,
    row_id: str,
    current: S,
    target: S,
) -> None:
    """
    Move `row_id` from `current` to `target` with a compare-and-set UPDATE.
    Raises InvalidState when the row is no longer in `current`.
    """
    result = await db.execute(
        update(model)
        .where(model.id == row_id, model.status == current)
        .values(status=target)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        logger.warning(
            "Lost status transition race",
            table=model.__tablename__,
            row_id=row_id,
            expected=current.value,
            target=target.value,
        )
        raise InvalidState(
            f"{model.__name__} {row_id} is no longer '{current.value}'"
        )
