"""The optimistic client against the real Django app, over httpx's WSGI transport."""

import httpx
import pytest
from django.core.wsgi import get_wsgi_application

from list_client import HttpTransport, MutationState, OptimisticCoordinator


@pytest.fixture
def coordinator():
    client = httpx.Client(
        transport=httpx.WSGITransport(app=get_wsgi_application()),
        base_url="http://testserver",
    )
    with HttpTransport(client=client) as transport:
        coord = OptimisticCoordinator(transport, page_size=10)
        coord.load("")
        yield coord


def test_speculative_move_matches_refetch(coordinator, collection):
    pending = coordinator.begin_move("", 9, 2)
    speculative = coordinator.view("").items

    coordinator.settle(pending, response=coordinator.send(pending))

    assert pending.state is MutationState.CONFIRMED
    assert coordinator.view("").items == speculative
    assert collection.ordered_ids()[:10] == [item.id for item in speculative]


def test_rejected_move_rolls_back(coordinator, collection):
    before = coordinator.view("")
    pending = coordinator.begin_move("", 0, 3)
    pending.request = {"fromIndex": 0, "toIndex": 1000}

    coordinator.run(pending)

    assert pending.state is MutationState.ROLLED_BACK
    assert "out of range" in str(pending.error)
    assert coordinator.view("") == before
    assert collection.ordered_ids() == list(range(1, 101))


def test_selection_and_reset_round_trip(coordinator, collection):
    coordinator.select("", [1, 4])
    coordinator.move("", 0, 5)
    coordinator.reset_order()

    items = coordinator.view("").items
    assert [item.id for item in items] == list(range(1, 11))
    assert [item.id for item in items if item.selected] == [1, 4]
    assert collection.selection.ids() == [1, 4]
