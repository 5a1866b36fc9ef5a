"""Optimistic mutations over the locally cached item list.

Each mutation goes ``APPLIED -> CONFIRMED | ROLLED_BACK``:

* ``begin_*`` snapshots the affected views, applies the change locally and
  queues the mutation behind the others of its kind;
* ``send`` waits until every earlier mutation of the kind has settled, then
  performs the request through the transport;
* ``settle`` confirms (nothing to undo) or restores the snapshot and replays
  the newer mutations of the kind on top of it.

Several mutations of one kind may overlap locally, but their round trips
never do, so the server applies them in the order the user made them. Only
the settlement that empties the queue of its kind refetches the cached views
and shows the success notification; an earlier settlement must not overwrite
the speculative state of a newer one with a refetch. Queue order is used
instead of timestamps because responses can arrive out of order.
"""

from __future__ import annotations

import enum
import itertools
import logging
import threading
from collections import Counter, defaultdict, deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from list_client.optimistic import MoveGesture, apply_reset, apply_selection
from list_client.transport import Transport, TransportError
from list_client.views import ListView, Page

logger = logging.getLogger(__name__)


class MutationKind(str, enum.Enum):
    ORDER = "order"
    SELECTION = "selection"


class MutationState(str, enum.Enum):
    IDLE = "idle"
    APPLIED = "applied"
    CONFIRMED = "confirmed"
    ROLLED_BACK = "rolled_back"


# label -> (success title, error title)
_TITLES = {
    "order": ("Order updated", "Error updating order"),
    "selection": ("Selection updated", "Error updating selection"),
    "reset": ("Order reset", "Error resetting order"),
}


def log_notifier(level: str, title: str, description: str = "") -> None:
    log = logger.error if level == "error" else logger.info
    log("%s: %s", title, description)


@dataclass
class PendingMutation:
    kind: MutationKind
    label: str
    request: dict[str, Any]
    send: Callable[[dict[str, Any]], dict[str, Any]]
    transform: Callable[[ListView], ListView]
    # rebuilds ``request`` from the views the mutation is replayed on
    resolve: Callable[[dict[str, ListView]], dict[str, Any] | None] | None = None
    seq: int = 0
    snapshot: dict[str, ListView] = field(default_factory=dict)
    state: MutationState = MutationState.IDLE
    response: dict[str, Any] | None = None
    error: Exception | None = None


class OptimisticCoordinator:
    def __init__(
        self,
        transport: Transport,
        *,
        page_size: int = 20,
        notify: Callable[[str, str, str], None] = log_notifier,
        on_invalidate: Callable[[MutationKind], None] | None = None,
    ):
        self.transport = transport
        self.page_size = page_size
        self.notify = notify
        self.on_invalidate = on_invalidate
        self._views: dict[str, ListView] = {}
        self._stats: dict[str, Any] | None = None
        self._queues: defaultdict[MutationKind, deque[PendingMutation]] = defaultdict(deque)
        self._seq = itertools.count(1)
        self._lock = threading.RLock()
        self._turns = threading.Condition(self._lock)
        self.invalidations: Counter[MutationKind] = Counter()

    # reads

    def view(self, search: str = "") -> ListView:
        with self._lock:
            return self._views.get(search, ListView(search=search))

    def stats(self) -> dict[str, Any] | None:
        with self._lock:
            return self._stats

    def _fetch_page(self, search: str, page: int) -> Page:
        return Page.from_json(self.transport.fetch_items(page, self.page_size, search))

    def load(self, search: str = "") -> ListView:
        """Fetch the first page of ``search``, replacing whatever was cached."""
        view = ListView(search=search).append(self._fetch_page(search, 1))
        with self._lock:
            self._views[search] = view
        return view

    def load_more(self, search: str = "") -> ListView:
        current = self.view(search)
        if current.pages and not current.has_more:
            return current
        page = self._fetch_page(search, current.next_page)
        with self._lock:
            view = self._views.get(search, ListView(search=search)).append(page)
            self._views[search] = view
        return view

    def load_stats(self) -> dict[str, Any]:
        stats = self.transport.fetch_stats()
        with self._lock:
            self._stats = stats
        return stats

    def refetch(self) -> None:
        """Reload every cached search with as many pages as it had, and stats if loaded."""
        with self._lock:
            loaded = {search: len(view.pages) for search, view in self._views.items()}
            has_stats = self._stats is not None
        for search, count in loaded.items():
            view = ListView(search=search)
            for number in range(1, max(count, 1) + 1):
                page = self._fetch_page(search, number)
                view = view.append(page)
                if not page.has_more:
                    break
            with self._lock:
                self._views[search] = view
        if has_stats:
            self.load_stats()

    def is_pending(self, kind: MutationKind) -> bool:
        with self._lock:
            return bool(self._queues[kind])

    # mutation lifecycle

    def _begin(
        self,
        kind: MutationKind,
        label: str,
        searches: Iterable[str],
        transform: Callable[[ListView], ListView],
        request: dict[str, Any],
        send: Callable[[dict[str, Any]], dict[str, Any]],
        resolve: Callable[[dict[str, ListView]], dict[str, Any] | None] | None = None,
    ) -> PendingMutation:
        with self._lock:
            snapshot = {s: self._views[s] for s in searches if s in self._views}
            self._views.update({s: transform(view) for s, view in snapshot.items()})
            pending = PendingMutation(
                kind=kind,
                label=label,
                request=request,
                send=send,
                transform=transform,
                resolve=resolve,
                seq=next(self._seq),
                snapshot=snapshot,
                state=MutationState.APPLIED,
            )
            self._queues[kind].append(pending)
        logger.debug("mutation.applied kind=%s request=%s", kind.value, request)
        return pending

    def begin_move(self, search: str, active_index: int, over_index: int) -> PendingMutation:
        with self._lock:
            view = self.view(search)
            gesture = MoveGesture.at(view, active_index, over_index)
            return self._begin(
                MutationKind.ORDER,
                "order",
                [search],
                gesture.apply,
                gesture.request(view),
                lambda request: self.transport.update_order(
                    request["fromIndex"], request["toIndex"]
                ),
                lambda views: gesture.request(views[search]) if search in views else None,
            )

    def begin_selection(
        self, search: str, selected_ids: Iterable[int], unselected_ids: Iterable[int]
    ) -> PendingMutation:
        selected = sorted(set(selected_ids))
        unselected = sorted(set(unselected_ids))
        return self._begin(
            MutationKind.SELECTION,
            "selection",
            [search],
            lambda view: apply_selection(view, selected, unselected),
            {"selectedIds": selected, "unSelectedIds": unselected},
            lambda request: self.transport.update_selection(
                request["selectedIds"], request["unSelectedIds"]
            ),
        )

    def begin_reset(self) -> PendingMutation:
        with self._lock:
            searches = list(self._views)
        return self._begin(
            MutationKind.ORDER,
            "reset",
            searches,
            apply_reset,
            {},
            lambda request: self.transport.reset_order(),
        )

    def send(self, pending: PendingMutation) -> dict[str, Any]:
        """Perform the request once every earlier mutation of its kind has settled.

        Blocks the calling thread until then, so a caller that sends two
        mutations of one kind itself must settle the first before sending the
        second.
        """
        with self._turns:
            while True:
                if pending.state is not MutationState.APPLIED:
                    raise ValueError(f"mutation already settled ({pending.state.value})")
                if self._queues[pending.kind][0] is pending:
                    break
                self._turns.wait()
            request = pending.request
        logger.debug("mutation.sent kind=%s request=%s", pending.kind.value, request)
        return pending.send(request)

    def _replay(self, failed: PendingMutation) -> None:
        """Restore ``failed``'s snapshot and re-apply the newer mutations of its kind."""
        views = dict(failed.snapshot)
        for later in self._queues[failed.kind]:
            if later.seq < failed.seq:
                continue
            touched = [s for s in later.snapshot if s in views]
            if not touched:
                continue
            for search in touched:
                later.snapshot[search] = views[search]
            if later.resolve is not None:
                request = later.resolve(views)
                if request is not None:
                    later.request = request
            for search in touched:
                views[search] = later.transform(views[search])
        self._views.update(views)

    def settle(
        self,
        pending: PendingMutation,
        *,
        response: dict[str, Any] | None = None,
        error: Exception | None = None,
    ) -> bool:
        """Reconcile ``pending``; return True when it was the last of its kind."""
        with self._lock:
            if pending.state is not MutationState.APPLIED:
                raise ValueError(f"mutation already settled ({pending.state.value})")
            queue = self._queues[pending.kind]
            queue.remove(pending)
            if error is not None:
                self._replay(pending)
                pending.state = MutationState.ROLLED_BACK
                pending.error = error
            else:
                pending.state = MutationState.CONFIRMED
                pending.response = response
            pending.snapshot = {}
            is_last = not queue
            self._turns.notify_all()

        if error is not None:
            logger.warning("mutation.rolled_back kind=%s error=%s", pending.kind.value, error)
            self.notify("error", _TITLES[pending.label][1], str(error))
        elif is_last:
            self.notify("success", _TITLES[pending.label][0], _describe(response))

        if is_last:
            self.invalidate(pending.kind)
        return is_last

    def invalidate(self, kind: MutationKind) -> None:
        self.invalidations[kind] += 1
        try:
            self.refetch()
        except TransportError as err:
            logger.warning("mutation.refetch_failed kind=%s error=%s", kind.value, err)
            self.notify("error", "Error refreshing list", str(err))
        if self.on_invalidate is not None:
            self.on_invalidate(kind)

    def run(self, pending: PendingMutation) -> PendingMutation:
        try:
            response = self.send(pending)
        except TransportError as err:
            self.settle(pending, error=err)
        except Exception as err:
            if pending.state is MutationState.APPLIED:
                self.settle(pending, error=err)
            raise
        else:
            self.settle(pending, response=response)
        return pending

    # one-shot helpers: apply, send and settle

    def move(self, search: str, active_index: int, over_index: int) -> PendingMutation:
        return self.run(self.begin_move(search, active_index, over_index))

    def select(
        self, search: str, selected_ids: Iterable[int] = (), unselected_ids: Iterable[int] = ()
    ) -> PendingMutation:
        return self.run(self.begin_selection(search, selected_ids, unselected_ids))

    def toggle(self, search: str, item_id: int, selected: bool) -> PendingMutation:
        if selected:
            return self.select(search, selected_ids=[item_id])
        return self.select(search, unselected_ids=[item_id])

    def reset_order(self) -> PendingMutation:
        return self.run(self.begin_reset())


def _describe(response: dict[str, Any] | None) -> str:
    if not response:
        return ""
    if "selectedCount" in response:
        return f"{response['selectedCount']} items selected"
    return str(response.get("message", ""))
