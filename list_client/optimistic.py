"""Speculative versions of the server mutations, applied to a ``ListView``.

The move arithmetic is the same window update the server performs, so for the
loaded items the local result matches what the next fetch returns.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from list_client.views import ListView


class LocalMoveError(IndexError):
    pass


def _check_offsets(items, *offsets: int) -> None:
    for index in offsets:
        if not 0 <= index < len(items):
            raise LocalMoveError(f"Index {index} is outside the {len(items)} loaded items")


def _position_of(items, item_id: int) -> int | None:
    for position, item in enumerate(items):
        if item.id == item_id:
            return position
    return None


@dataclass(frozen=True)
class MoveGesture:
    """A drag of ``moved_id`` onto the slot held by ``target_id``.

    Kept by id rather than by list offset so the same gesture can be applied
    again to a view that has changed underneath it.
    """

    moved_id: int
    target_id: int

    @classmethod
    def at(cls, view: ListView, active_index: int, over_index: int) -> MoveGesture:
        items = view.items
        _check_offsets(items, active_index, over_index)
        return cls(moved_id=items[active_index].id, target_id=items[over_index].id)

    def request(self, view: ListView) -> dict[str, int] | None:
        """Effective indices of the two rows in ``view``, as the server expects."""
        by_id = {item.id: item for item in view.items}
        moved = by_id.get(self.moved_id)
        target = by_id.get(self.target_id)
        if moved is None or target is None:
            return None
        return {"fromIndex": moved.effective_index, "toIndex": target.effective_index}

    def apply(self, view: ListView) -> ListView:
        items = view.items
        active_index = _position_of(items, self.moved_id)
        over_index = _position_of(items, self.target_id)
        if active_index is None or over_index is None:
            return view
        return apply_move(view, active_index, over_index)


def apply_move(view: ListView, active_index: int, over_index: int) -> ListView:
    items = list(view.items)
    _check_offsets(items, active_index, over_index)
    if active_index == over_index:
        return view

    moved = items[active_index]
    moved_new_index = items[over_index].effective_index
    lo, hi = min(active_index, over_index), max(active_index, over_index)
    shift = 1 if active_index > over_index else -1

    items.insert(over_index, items.pop(active_index))
    for position in range(lo, hi + 1):
        item = items[position]
        if item.id == moved.id:
            items[position] = item.with_index(moved_new_index)
        else:
            items[position] = item.with_index(item.effective_index + shift)
    return view.with_items(tuple(items))


def apply_selection(
    view: ListView, selected_ids: Iterable[int], unselected_ids: Iterable[int]
) -> ListView:
    selected = set(selected_ids)
    unselected = set(unselected_ids)
    items = []
    for item in view.items:
        if item.id in selected:
            items.append(item.with_selected(True))
        elif item.id in unselected:
            items.append(item.with_selected(False))
        else:
            items.append(item)
    return view.with_items(tuple(items))


def apply_reset(view: ListView) -> ListView:
    items = sorted(
        (item.with_index(None) for item in view.items), key=lambda item: item.default_index
    )
    return view.with_items(tuple(items))
