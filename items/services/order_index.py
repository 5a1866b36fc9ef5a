"""Effective ordering of the record store.

``_order`` lists record ids by display position. Every mutation keeps the
invariant that the record at position ``p`` has effective index ``p``, so a
page of the unfiltered order is a plain slice and a move only rewrites the
window between its two positions.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from items.services.errors import InvalidIndex
from items.services.record_store import RecordStore

logger = logging.getLogger(__name__)


class OrderIndex:
    def __init__(self, store: RecordStore):
        self._store = store
        self._order: list[int] = []
        self._overridden: set[int] = set()
        self.version = 0
        self._rebuild()

    def _rebuild(self) -> None:
        records = self._store.all()
        order = [0] * len(records)
        for record in records:
            order[record.effective_index] = record.id
        self._order = order

    def _check(self, index: int) -> None:
        if not 0 <= index < len(self._order):
            raise InvalidIndex(index, len(self._order))

    def ordered_ids(self) -> Sequence[int]:
        """Ids sorted by effective index; callers must not mutate the result."""
        return self._order

    def effective_index_of(self, record_id: int) -> int:
        record = self._store.get_by_id(record_id)
        if record is None:
            raise KeyError(record_id)
        return record.effective_index

    def reordered_ids(self) -> set[int]:
        return set(self._overridden)

    def move(self, from_index: int, to_index: int) -> None:
        """Move the record at ``from_index`` to ``to_index``.

        Records between the two positions shift one slot towards the gap the
        moved record left behind: ``+1`` when moving up, ``-1`` when moving
        down. The moved record takes the target's previous effective index.
        """
        self._check(from_index)
        self._check(to_index)
        if from_index == to_index:
            return

        get = self._store.get_by_id
        moved = get(self._order[from_index])
        target = get(self._order[to_index])
        moved_new_index = target.effective_index
        is_moving_up = from_index > to_index
        lo, hi = min(from_index, to_index), max(from_index, to_index)
        shift = 1 if is_moving_up else -1

        self._order.insert(to_index, self._order.pop(from_index))

        for position in range(lo, hi + 1):
            record = get(self._order[position])
            if record is moved:
                record.reordered_index = moved_new_index
            else:
                record.reordered_index = record.effective_index + shift
            self._overridden.add(record.id)

        self.version += 1
        logger.info(
            "order.move id=%s from=%s to=%s window=%s",
            moved.id,
            from_index,
            to_index,
            hi - lo + 1,
        )

    def reset_to_default(self) -> None:
        for record in self._store.all():
            record.reordered_index = None
        self._overridden.clear()
        self._rebuild()
        self.version += 1
        logger.info("order.reset items=%s", len(self._order))
