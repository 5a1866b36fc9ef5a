from items.services.record_store import RecordStore


def test_create_assigns_ids_and_default_positions():
    store = RecordStore()
    a = store.create("Alpha")
    b = store.create("Beta")

    assert (a.id, a.default_index) == (1, 0)
    assert (b.id, b.default_index) == (2, 1)
    assert a.reordered_index is None
    assert a.effective_index == 0
    assert a.search_key == "alpha"
    assert len(store) == 2


def test_get_by_id_and_all():
    store = RecordStore()
    store.bulk_seed(3)

    assert store.get_by_id(2).value == "Item 2"
    assert store.get_by_id(4) is None
    assert [r.value for r in store.all()] == ["Item 1", "Item 2", "Item 3"]


def test_effective_index_prefers_override():
    store = RecordStore()
    record = store.create("x")
    record.reordered_index = 7
    assert record.effective_index == 7
