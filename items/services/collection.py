"""The item collection: one store with its order, selection and queries.

A ``Collection`` is built explicitly (``Collection.seeded``) and handed to
whoever serves it. Mutations hold the write side of ``lock``; reads hold the
read side, so a page is never assembled from a half-applied move.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import psutil

from items.services._concurrency import ReadWriteLock, reading, writing
from items.services.inputs import MoveInput, PageQuery, SelectionInput
from items.services.order_index import OrderIndex
from items.services.query import ItemView, PagedView, QueryService
from items.services.record_store import RecordStore
from items.services.selection import SelectionSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Stats:
    total_items: int
    selected_items: list[ItemView]
    reordered_items: list[ItemView]
    memory_usage: dict[str, int]

    @property
    def reordered_count(self) -> int:
        return len(self.reordered_items)


def memory_usage() -> dict[str, int]:
    info = psutil.Process(os.getpid()).memory_info()
    return {"rss": int(info.rss), "vms": int(info.vms)}


class Collection:
    def __init__(self, store: RecordStore, *, search_cache_size: int = 8):
        self.lock = ReadWriteLock()
        self.store = store
        self.order = OrderIndex(store)
        self.selection = SelectionSet()
        self.queries = QueryService(
            store, self.order, self.selection, cache_size=search_cache_size
        )

    @classmethod
    def seeded(
        cls,
        count: int,
        template: str = "Item {n}",
        *,
        search_cache_size: int = 8,
    ) -> Collection:
        store = RecordStore()
        store.bulk_seed(count, template)
        logger.info("collection.seeded items=%s", count)
        return cls(store, search_cache_size=search_cache_size)

    @reading
    def page(self, params: PageQuery) -> PagedView:
        return self.queries.query(params.page, params.limit, params.search)

    @reading
    def ordered_ids(self) -> list[int]:
        return list(self.order.ordered_ids())

    @reading
    def selected_items(self) -> list[ItemView]:
        return self.queries.selected_items()

    @reading
    def stats(self) -> Stats:
        return Stats(
            total_items=len(self.store),
            selected_items=self.queries.selected_items(),
            reordered_items=self.queries.reordered_items(),
            memory_usage=memory_usage(),
        )

    @writing
    def move(self, params: MoveInput) -> None:
        self.order.move(params.from_index, params.to_index)

    @writing
    def reset_order(self) -> None:
        self.order.reset_to_default()

    @writing
    def update_selection(self, params: SelectionInput) -> int:
        return self.selection.update(params.selected_ids, params.unselected_ids)
