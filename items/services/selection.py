from __future__ import annotations

import logging
from collections.abc import Iterable

logger = logging.getLogger(__name__)


class SelectionSet:
    """Selected record ids, independent of the ordering.

    Ids unknown to the record store are kept as well and count towards
    :meth:`size`.
    """

    def __init__(self) -> None:
        self._ids: set[int] = set()

    def __contains__(self, record_id: int) -> bool:
        return record_id in self._ids

    def contains(self, record_id: int) -> bool:
        return record_id in self._ids

    def size(self) -> int:
        return len(self._ids)

    def ids(self) -> list[int]:
        return sorted(self._ids)

    def update(self, selected_ids: Iterable[int], unselected_ids: Iterable[int]) -> int:
        """Apply one selection change and return the new size.

        An id listed in both ``selected_ids`` and ``unselected_ids`` ends up
        selected: removals are applied first, additions last.
        """
        selected = set(selected_ids)
        unselected = set(unselected_ids)
        self._ids.difference_update(unselected)
        self._ids.update(selected)
        logger.info(
            "selection.update selected=%s unselected=%s size=%s",
            len(selected),
            len(unselected),
            len(self._ids),
        )
        return len(self._ids)
