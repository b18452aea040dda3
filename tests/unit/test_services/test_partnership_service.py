"""Tests for the partnership registry."""

import pytest
from sqlalchemy import func, select

from brokerage.core.exceptions import (
    Conflict,
    Forbidden,
    InvalidState,
    NotFound,
    SelfReference,
)
from brokerage.models.activity import ActivityAction
from brokerage.models.partnership import Partnership, PartnershipStatus
from brokerage.services.activity_service import ActivityService
from brokerage.services.partnership_service import PartnershipService
from brokerage.services.share_service import PropertyShareService
from brokerage.services.visibility_service import VisibilityService
from tests.utils.factories import create_accepted_partnership, create_company, create_property


async def _open_rows_for_pair(db, a, b) -> int:
    result = await db.execute(
        select(func.count())
        .select_from(Partnership)
        .where(
            Partnership.requester_company_id.in_([a.id, b.id]),
            Partnership.partner_company_id.in_([a.id, b.id]),
            Partnership.status.in_([PartnershipStatus.pending, PartnershipStatus.accepted]),
        )
    )
    return result.scalar_one()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_request_creates_pending_partnership(db):
    a = await create_company(db)
    b = await create_company(db, slug="b-corp")

    partnership = await PartnershipService.request(db, a.id, "b-corp", share_all_properties=True)

    assert partnership.status == PartnershipStatus.pending
    assert partnership.requester_company_id == a.id
    assert partnership.partner_company_id == b.id
    assert partnership.share_all_properties is True
    assert partnership.partner.slug == "b-corp"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_request_unknown_slug_is_not_found(db):
    a = await create_company(db)

    with pytest.raises(NotFound):
        await PartnershipService.request(db, a.id, "nobody-here")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_request_own_slug_is_self_reference(db):
    a = await create_company(db, slug="a-corp")

    with pytest.raises(SelfReference):
        await PartnershipService.request(db, a.id, "a-corp")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_request_conflicts_in_either_direction(db):
    a = await create_company(db, slug="a-corp")
    b = await create_company(db, slug="b-corp")
    await PartnershipService.request(db, a.id, "b-corp")

    with pytest.raises(Conflict):
        await PartnershipService.request(db, a.id, "b-corp")
    with pytest.raises(Conflict):
        await PartnershipService.request(db, b.id, "a-corp")

    assert await _open_rows_for_pair(db, a, b) == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_accepted_partnership_also_blocks_new_request(db):
    a = await create_company(db, slug="a-corp")
    b = await create_company(db, slug="b-corp")
    await create_accepted_partnership(db, a, b)

    with pytest.raises(Conflict):
        await PartnershipService.request(db, b.id, "a-corp")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_terminal_partnership_does_not_block_new_request(db):
    a = await create_company(db, slug="a-corp")
    b = await create_company(db, slug="b-corp")
    first = await PartnershipService.request(db, a.id, "b-corp")
    await PartnershipService.reject(db, first.id, b.id)

    second = await PartnershipService.request(db, b.id, "a-corp")

    assert second.status == PartnershipStatus.pending
    assert await _open_rows_for_pair(db, a, b) == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_only_partner_may_accept_or_reject(db):
    a = await create_company(db)
    b = await create_company(db, slug="b-corp")
    outsider = await create_company(db)
    partnership = await PartnershipService.request(db, a.id, "b-corp")

    with pytest.raises(Forbidden):
        await PartnershipService.accept(db, partnership.id, a.id)
    with pytest.raises(Forbidden):
        await PartnershipService.reject(db, partnership.id, a.id)
    with pytest.raises(Forbidden):
        await PartnershipService.accept(db, partnership.id, outsider.id)

    accepted = await PartnershipService.accept(db, partnership.id, b.id)
    assert accepted.status == PartnershipStatus.accepted


@pytest.mark.unit
@pytest.mark.asyncio
async def test_accept_twice_is_invalid_state(db):
    a = await create_company(db)
    b = await create_company(db)
    partnership = await create_accepted_partnership(db, a, b)

    with pytest.raises(InvalidState):
        await PartnershipService.accept(db, partnership.id, b.id)
    with pytest.raises(InvalidState):
        await PartnershipService.reject(db, partnership.id, b.id)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_cancel_requires_accepted_and_membership(db):
    a = await create_company(db)
    b = await create_company(db, slug="b-corp")
    outsider = await create_company(db)
    partnership = await PartnershipService.request(db, a.id, "b-corp")

    with pytest.raises(InvalidState):
        await PartnershipService.cancel(db, partnership.id, a.id)

    await PartnershipService.accept(db, partnership.id, b.id)
    with pytest.raises(Forbidden):
        await PartnershipService.cancel(db, partnership.id, outsider.id)

    canceled = await PartnershipService.cancel(db, partnership.id, a.id)
    assert canceled.status == PartnershipStatus.canceled

    with pytest.raises(InvalidState):
        await PartnershipService.cancel(db, partnership.id, b.id)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_either_side_may_cancel(db):
    a = await create_company(db)
    b = await create_company(db)
    partnership = await create_accepted_partnership(db, a, b)

    canceled = await PartnershipService.cancel(db, partnership.id, b.id)

    assert canceled.status == PartnershipStatus.canceled


@pytest.mark.unit
@pytest.mark.asyncio
async def test_unknown_partnership_is_not_found(db):
    a = await create_company(db)

    with pytest.raises(NotFound):
        await PartnershipService.accept(db, "00000000-0000-0000-0000-000000000000", a.id)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_listings_are_scoped_and_repeatable(db):
    a = await create_company(db)
    b = await create_company(db, slug="b-corp")
    c = await create_company(db, slug="c-corp")
    pending = await PartnershipService.request(db, a.id, "c-corp")
    accepted = await create_accepted_partnership(db, b, a)

    assert {p.id for p in await PartnershipService.list_for_company(db, a.id)} == {
        pending.id,
        accepted.id,
    }
    # a is the requester of the pending row, so it has nothing to answer
    assert await PartnershipService.list_pending(db, a.id) == []
    assert [p.id for p in await PartnershipService.list_pending(db, c.id)] == [pending.id]
    assert [p.id for p in await PartnershipService.list_accepted(db, a.id)] == [accepted.id]

    first = [p.id for p in await PartnershipService.list_accepted(db, a.id)]
    second = [p.id for p in await PartnershipService.list_accepted(db, a.id)]
    assert first == second


@pytest.mark.unit
@pytest.mark.asyncio
async def test_transitions_are_recorded_in_activity_feed(db):
    a = await create_company(db)
    b = await create_company(db)
    partnership = await create_accepted_partnership(db, a, b)
    await PartnershipService.cancel(db, partnership.id, a.id)

    entries = await ActivityService.list_for_company(db, b.id)

    assert {e.action for e in entries} == {
        ActivityAction.partnership_requested,
        ActivityAction.partnership_accepted,
        ActivityAction.partnership_canceled,
    }
    assert all(e.partnership_id == partnership.id for e in entries)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_share_all_properties_is_recorded_but_shares_nothing(db):
    a = await create_company(db)
    b = await create_company(db)
    listing = await create_property(db, a)

    partnership = await PartnershipService.request(db, a.id, b.slug, share_all_properties=True)
    partnership = await PartnershipService.accept(db, partnership.id, b.id)

    assert partnership.share_all_properties is True
    assert [p.share_all_properties for p in await PartnershipService.list_accepted(db, b.id)] == [True]
    # each property still needs an explicit share
    assert await PropertyShareService.list_received(db, b.id) == []
    assert listing.id not in {
        item.listing.id for item in await VisibilityService.visible_properties(db, b.id)
    }
