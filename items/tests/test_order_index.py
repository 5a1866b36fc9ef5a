import random

import pytest

from items.services.errors import InvalidIndex
from items.services.order_index import OrderIndex
from tests.factories import make_store


def _index(count=5):
    store = make_store(f"Item {n}" for n in range(count))
    return store, OrderIndex(store)


def _assert_consistent(store, order):
    ids = list(order.ordered_ids())
    assert sorted(ids) == [r.id for r in store.all()]
    effective = [store.get_by_id(rid).effective_index for rid in ids]
    assert effective == list(range(len(ids)))


def test_initial_order_follows_default_index():
    store, order = _index()
    assert list(order.ordered_ids()) == [1, 2, 3, 4, 5]
    assert order.effective_index_of(3) == 2


def test_move_last_to_second_position():
    store, order = _index()
    order.move(4, 1)

    assert list(order.ordered_ids()) == [1, 5, 2, 3, 4]
    # the moved record takes the target's previous effective index
    assert store.get_by_id(5).reordered_index == 1
    # records in the window shift one slot down
    assert [store.get_by_id(i).reordered_index for i in (2, 3, 4)] == [2, 3, 4]
    assert store.get_by_id(1).reordered_index is None
    _assert_consistent(store, order)


def test_move_down_shifts_window_up():
    store, order = _index()
    order.move(0, 3)

    assert list(order.ordered_ids()) == [2, 3, 4, 1, 5]
    assert store.get_by_id(1).effective_index == 3
    assert [store.get_by_id(i).effective_index for i in (2, 3, 4)] == [0, 1, 2]
    assert store.get_by_id(5).reordered_index is None
    _assert_consistent(store, order)


def test_move_to_same_position_is_noop():
    store, order = _index()
    version = order.version
    order.move(2, 2)
    assert list(order.ordered_ids()) == [1, 2, 3, 4, 5]
    assert order.version == version
    assert order.reordered_ids() == set()


@pytest.mark.parametrize("src,dst", [(-1, 0), (0, 5), (5, 0), (2, -3), (99, 99)])
def test_move_out_of_range_raises_without_mutation(src, dst):
    store, order = _index()
    order.move(4, 0)
    before = list(order.ordered_ids())
    overrides = {r.id: r.reordered_index for r in store.all()}

    with pytest.raises(InvalidIndex):
        order.move(src, dst)

    assert list(order.ordered_ids()) == before
    assert {r.id: r.reordered_index for r in store.all()} == overrides


def test_random_moves_keep_ids_unique_and_land_at_target():
    rng = random.Random(7)
    store, order = _index(60)
    for _ in range(300):
        src = rng.randrange(60)
        dst = rng.randrange(60)
        moved_id = order.ordered_ids()[src]
        order.move(src, dst)
        assert order.ordered_ids()[dst] == moved_id
        assert order.effective_index_of(moved_id) == dst
    _assert_consistent(store, order)


def test_reset_restores_default_order_after_moves():
    rng = random.Random(3)
    store, order = _index(40)
    for _ in range(50):
        order.move(rng.randrange(40), rng.randrange(40))

    order.reset_to_default()

    assert list(order.ordered_ids()) == [r.id for r in sorted(store.all(), key=lambda r: r.default_index)]
    assert all(r.reordered_index is None for r in store.all())
    assert order.reordered_ids() == set()


def test_move_then_reset_round_trip():
    store, order = _index()
    order.move(1, 3)
    order.reset_to_default()
    assert list(order.ordered_ids()) == [1, 2, 3, 4, 5]


def test_reordered_ids_track_window_members():
    store, order = _index()
    order.move(1, 3)
    assert order.reordered_ids() == {2, 3, 4}


def test_effective_index_of_unknown_id():
    _, order = _index()
    with pytest.raises(KeyError):
        order.effective_index_of(404)
