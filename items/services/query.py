from __future__ import annotations

import logging
import math
import threading
from collections import OrderedDict
from collections.abc import Sequence
from dataclasses import dataclass

from items.services.errors import MalformedInput
from items.services.order_index import OrderIndex
from items.services.record_store import Record, RecordStore
from items.services.selection import SelectionSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ItemView:
    id: int
    value: str
    selected: bool
    default_index: int
    reordered_index: int | None

    @classmethod
    def of(cls, record: Record, selected: bool) -> ItemView:
        return cls(
            id=record.id,
            value=record.value,
            selected=selected,
            default_index=record.default_index,
            reordered_index=record.reordered_index,
        )


@dataclass(frozen=True)
class PagedView:
    items: tuple[ItemView, ...]
    total_items: int
    total_pages: int
    current_page: int
    has_more: bool


class QueryService:
    """Paginated, searchable reads over the current effective order."""

    def __init__(
        self,
        store: RecordStore,
        order: OrderIndex,
        selection: SelectionSet,
        cache_size: int = 8,
    ):
        self.store = store
        self.order = order
        self.selection = selection
        self._cache_size = cache_size
        # needle -> (order version, matching ids in display order)
        self._search_cache: OrderedDict[str, tuple[int, list[int]]] = OrderedDict()
        self._cache_lock = threading.Lock()

    def _filtered_ids(self, search: str) -> Sequence[int]:
        if not search:
            return self.order.ordered_ids()

        needle = search.lower()
        version = self.order.version
        with self._cache_lock:
            cached = self._search_cache.get(needle)
            if cached is not None and cached[0] == version:
                self._search_cache.move_to_end(needle)
                logger.debug("query.search cache hit needle=%r", needle)
                return cached[1]

        get = self.store.get_by_id
        ids = [rid for rid in self.order.ordered_ids() if needle in get(rid).search_key]
        if self._cache_size > 0:
            with self._cache_lock:
                self._search_cache[needle] = (version, ids)
                self._search_cache.move_to_end(needle)
                while len(self._search_cache) > self._cache_size:
                    self._search_cache.popitem(last=False)
        return ids

    def query(self, page: int = 1, limit: int = 20, search: str = "") -> PagedView:
        if page < 1:
            raise MalformedInput("page must be >= 1")
        if limit < 1:
            raise MalformedInput("limit must be > 0")

        ids = self._filtered_ids(search or "")
        total = len(ids)
        offset = (page - 1) * limit
        get = self.store.get_by_id
        items = tuple(
            ItemView.of(get(rid), rid in self.selection) for rid in ids[offset : offset + limit]
        )
        total_pages = math.ceil(total / limit)
        return PagedView(
            items=items,
            total_items=total,
            total_pages=total_pages,
            current_page=page,
            has_more=page < total_pages,
        )

    def selected_items(self) -> list[ItemView]:
        """Selected records known to the store, by id."""
        out = []
        for rid in self.selection.ids():
            record = self.store.get_by_id(rid)
            if record is not None:
                out.append(ItemView.of(record, True))
        return out

    def reordered_items(self) -> list[ItemView]:
        """Records whose override puts them away from their default slot."""
        out = []
        for rid in sorted(self.order.reordered_ids()):
            record = self.store.get_by_id(rid)
            if record.reordered_index != record.default_index:
                out.append(ItemView.of(record, rid in self.selection))
        return out
