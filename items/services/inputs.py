from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PageQuery:
    page: int = 1
    limit: int = 20
    search: str = ""


@dataclass(frozen=True)
class MoveInput:
    from_index: int
    to_index: int


@dataclass(frozen=True)
class SelectionInput:
    selected_ids: frozenset[int]
    unselected_ids: frozenset[int]
