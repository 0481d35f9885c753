from types import SimpleNamespace
import uuid

import pytest

from tenderbid.models.enums import BidStatus, TenderStatus
from tenderbid.services.errors import InvalidStatusTransition
from tenderbid.services.state_machines import BidStateMachine, TenderStateMachine

pytestmark = pytest.mark.anyio


def record(status):
    return SimpleNamespace(id=uuid.uuid4(), status=status.value)


@pytest.mark.parametrize(
    "source, target",
    [
        (TenderStatus.CREATED, TenderStatus.PUBLISHED),
        (TenderStatus.CREATED, TenderStatus.CLOSED),
        (TenderStatus.PUBLISHED, TenderStatus.CLOSED),
    ],
)
async def test_tender_allowed_transitions(source, target):
    tender = record(source)

    await TenderStateMachine(tender).move_to(target)

    assert tender.status == target.value


@pytest.mark.parametrize(
    "source, target",
    [
        (TenderStatus.PUBLISHED, TenderStatus.CREATED),
        (TenderStatus.CLOSED, TenderStatus.PUBLISHED),
        (TenderStatus.CLOSED, TenderStatus.CREATED),
    ],
)
async def test_tender_forbidden_transitions(source, target):
    tender = record(source)

    with pytest.raises(InvalidStatusTransition):
        await TenderStateMachine(tender).move_to(target)
    assert tender.status == source.value


async def test_same_status_is_a_no_op():
    tender = record(TenderStatus.CLOSED)

    assert await TenderStateMachine(tender).move_to("Closed") == "Closed"
    assert tender.status == "Closed"


@pytest.mark.parametrize("target", [BidStatus.CANCELED, BidStatus.APPROVED, BidStatus.REJECTED])
async def test_open_bid_can_be_finished(target):
    for source in (BidStatus.CREATED, BidStatus.PUBLISHED):
        bid = record(source)
        await BidStateMachine(bid).move_to(target)
        assert bid.status == target.value


@pytest.mark.parametrize("final", [BidStatus.CANCELED, BidStatus.APPROVED, BidStatus.REJECTED])
async def test_finished_bid_is_final(final):
    for target in BidStatus:
        if target is final:
            continue
        bid = record(final)
        with pytest.raises(InvalidStatusTransition):
            await BidStateMachine(bid).move_to(target)


async def test_can_move_to():
    machine = BidStateMachine(record(BidStatus.PUBLISHED))

    assert machine.can_move_to(BidStatus.APPROVED.value)
    assert machine.can_move_to(BidStatus.PUBLISHED.value)
    assert not machine.can_move_to(BidStatus.CREATED.value)
