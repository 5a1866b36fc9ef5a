"""Immutable client-side copies of the paged item list.

Everything here is a frozen value: the coordinator snapshots a ``ListView``
by keeping a reference to it and builds a new one for every speculative
change.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class ClientItem:
    id: int
    value: str
    selected: bool
    default_index: int
    reordered_index: int | None = None

    @property
    def effective_index(self) -> int:
        if self.reordered_index is not None:
            return self.reordered_index
        return self.default_index

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> ClientItem:
        return cls(
            id=int(data["id"]),
            value=str(data["value"]),
            selected=bool(data["selected"]),
            default_index=int(data["defaultIndex"]),
            reordered_index=data.get("reorderedIndex"),
        )

    def with_selected(self, selected: bool) -> ClientItem:
        if selected == self.selected:
            return self
        return replace(self, selected=selected)

    def with_index(self, reordered_index: int | None) -> ClientItem:
        return replace(self, reordered_index=reordered_index)


@dataclass(frozen=True)
class Page:
    items: tuple[ClientItem, ...]
    total_items: int
    total_pages: int
    current_page: int
    has_more: bool

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Page:
        return cls(
            items=tuple(ClientItem.from_json(item) for item in data["items"]),
            total_items=int(data["totalItems"]),
            total_pages=int(data["totalPages"]),
            current_page=int(data["currentPage"]),
            has_more=bool(data["hasMore"]),
        )


@dataclass(frozen=True)
class ListView:
    """The loaded pages of one search, in the order they were fetched."""

    search: str = ""
    pages: tuple[Page, ...] = ()

    @property
    def items(self) -> tuple[ClientItem, ...]:
        return tuple(item for page in self.pages for item in page.items)

    @property
    def has_more(self) -> bool:
        return bool(self.pages) and self.pages[-1].has_more

    @property
    def next_page(self) -> int:
        return self.pages[-1].current_page + 1 if self.pages else 1

    def append(self, page: Page) -> ListView:
        return replace(self, pages=self.pages + (page,))

    def with_items(self, items: tuple[ClientItem, ...]) -> ListView:
        """Pour ``items`` back into pages of the same sizes as before."""
        pages = []
        start = 0
        for page in self.pages:
            end = start + len(page.items)
            pages.append(replace(page, items=tuple(items[start:end])))
            start = end
        return replace(self, pages=tuple(pages))
