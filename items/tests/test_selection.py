from items.services.selection import SelectionSet


def test_update_adds_and_removes():
    sel = SelectionSet()
    assert sel.update({1, 2, 3}, set()) == 3
    assert sel.update(set(), {2}) == 2
    assert sel.contains(1)
    assert not sel.contains(2)
    assert 3 in sel


def test_selection_wins_over_unselection_in_same_call():
    sel = SelectionSet()
    sel.update([5], [5])
    assert sel.contains(5)

    sel.update([], [5])
    assert not sel.contains(5)


def test_unknown_ids_count_towards_size():
    sel = SelectionSet()
    sel.update([10_000_000, 1], [])
    assert sel.size() == 2
    assert sel.ids() == [1, 10_000_000]


def test_unselecting_missing_id_is_noop():
    sel = SelectionSet()
    assert sel.update([], [42]) == 0
