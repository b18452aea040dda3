"""Tests for the partnership and share status machines."""

import pytest

from brokerage.core.exceptions import InvalidState
from brokerage.models.partnership import PartnershipStatus
from brokerage.models.property_share import ShareStatus
from brokerage.services.transitions import (
    PARTNERSHIP_TRANSITIONS,
    SHARE_TRANSITIONS,
    next_status,
)


@pytest.mark.unit
def test_every_status_has_an_entry():
    assert set(PARTNERSHIP_TRANSITIONS) == set(PartnershipStatus)
    assert set(SHARE_TRANSITIONS) == set(ShareStatus)


@pytest.mark.unit
def test_terminal_statuses_have_no_transitions():
    for status, events in PARTNERSHIP_TRANSITIONS.items():
        assert (events == {}) == status.is_terminal
    for status, events in SHARE_TRANSITIONS.items():
        assert (events == {}) == status.is_terminal


@pytest.mark.unit
@pytest.mark.parametrize(
    "current,event,expected",
    [
        (PartnershipStatus.pending, "accept", PartnershipStatus.accepted),
        (PartnershipStatus.pending, "reject", PartnershipStatus.rejected),
        (PartnershipStatus.accepted, "cancel", PartnershipStatus.canceled),
    ],
)
def test_partnership_transitions(current, event, expected):
    assert next_status(PARTNERSHIP_TRANSITIONS, current, event) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "current,event",
    [
        (PartnershipStatus.pending, "cancel"),
        (PartnershipStatus.accepted, "accept"),
        (PartnershipStatus.rejected, "accept"),
        (PartnershipStatus.canceled, "cancel"),
    ],
)
def test_partnership_invalid_transitions(current, event):
    with pytest.raises(InvalidState):
        next_status(PARTNERSHIP_TRANSITIONS, current, event)


@pytest.mark.unit
@pytest.mark.parametrize(
    "current,event",
    [
        (ShareStatus.pending, "revoke"),
        (ShareStatus.accepted, "reject"),
        (ShareStatus.revoked, "revoke"),
        (ShareStatus.rejected, "accept"),
    ],
)
def test_share_invalid_transitions(current, event):
    with pytest.raises(InvalidState):
        next_status(SHARE_TRANSITIONS, current, event)
