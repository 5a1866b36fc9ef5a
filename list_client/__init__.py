"""Client side of the items API: cached pages plus optimistic mutations."""

from list_client.coordinator import (
    MutationKind,
    MutationState,
    OptimisticCoordinator,
    PendingMutation,
)
from list_client.transport import HttpTransport, TransportError
from list_client.views import ClientItem, ListView, Page

__all__ = [
    "ClientItem",
    "HttpTransport",
    "ListView",
    "MutationKind",
    "MutationState",
    "OptimisticCoordinator",
    "Page",
    "PendingMutation",
    "TransportError",
]
