"""HTTP transport for the items API, built on httpx."""

from __future__ import annotations

import logging
import os
from typing import Any, Protocol

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = os.getenv("LIST_API_BASE", "http://localhost:8000")
DEFAULT_TIMEOUT = float(os.getenv("LIST_API_TIMEOUT", "10"))


class TransportError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class Transport(Protocol):
    def fetch_items(self, page: int, limit: int, search: str) -> dict[str, Any]: ...

    def fetch_stats(self) -> dict[str, Any]: ...

    def update_selection(
        self, selected_ids: list[int], unselected_ids: list[int]
    ) -> dict[str, Any]: ...

    def update_order(self, from_index: int, to_index: int) -> dict[str, Any]: ...

    def reset_order(self) -> dict[str, Any]: ...


class HttpTransport:
    """Blocking client; timeouts and HTTP errors surface as ``TransportError``."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ):
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpTransport:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _request(self, method: str, url: str, **kwargs) -> dict[str, Any]:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as err:
            raise TransportError(f"{method} {url} timed out") from err
        except httpx.HTTPError as err:
            raise TransportError(f"{method} {url} failed: {err}") from err

        try:
            payload = response.json()
        except ValueError as err:
            raise TransportError(
                f"{method} {url} returned invalid JSON", response.status_code
            ) from err

        if response.is_error or (isinstance(payload, dict) and payload.get("success") is False):
            message = payload.get("message") if isinstance(payload, dict) else None
            logger.warning("transport.error %s %s status=%s", method, url, response.status_code)
            raise TransportError(
                message or f"{method} {url} failed with HTTP {response.status_code}",
                response.status_code,
            )
        return payload

    def fetch_items(self, page: int, limit: int, search: str) -> dict[str, Any]:
        return self._request(
            "GET", "/items", params={"page": page, "limit": limit, "search": search}
        )

    def fetch_selected(self) -> dict[str, Any]:
        return self._request("GET", "/items/selected")

    def fetch_stats(self) -> dict[str, Any]:
        return self._request("GET", "/stats")

    def update_selection(self, selected_ids: list[int], unselected_ids: list[int]) -> dict[str, Any]:
        return self._request(
            "PATCH",
            "/items/selection",
            json={"selectedIds": list(selected_ids), "unSelectedIds": list(unselected_ids)},
        )

    def update_order(self, from_index: int, to_index: int) -> dict[str, Any]:
        return self._request(
            "PATCH", "/items/order", json={"fromIndex": from_index, "toIndex": to_index}
        )

    def reset_order(self) -> dict[str, Any]:
        return self._request("PATCH", "/items/order/reset")
