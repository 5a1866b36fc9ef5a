import json

import httpx
import pytest

from list_client.transport import HttpTransport, TransportError


def _transport(handler):
    client = httpx.Client(transport=httpx.MockTransport(handler), base_url="http://api")
    return HttpTransport(client=client)


def test_fetch_items_sends_query_params():
    seen = {}

    def handler(request):
        seen["url"] = request.url
        return httpx.Response(200, json={"items": [], "totalItems": 0})

    payload = _transport(handler).fetch_items(2, 20, "Item 12")

    assert payload == {"items": [], "totalItems": 0}
    assert seen["url"].path == "/items"
    assert seen["url"].params["page"] == "2"
    assert seen["url"].params["search"] == "Item 12"


def test_update_order_sends_patch_body():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"success": True, "message": "ok"})

    _transport(handler).update_order(4, 1)

    assert seen == {"method": "PATCH", "body": {"fromIndex": 4, "toIndex": 1}}


def test_update_selection_uses_wire_field_names():
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"success": True, "selectedCount": 1})

    _transport(handler).update_selection([1], [2])

    assert seen == {"path": "/items/selection", "body": {"selectedIds": [1], "unSelectedIds": [2]}}


def test_http_error_carries_server_message():
    def handler(request):
        return httpx.Response(400, json={"success": False, "message": "Index 9 is out of range"})

    with pytest.raises(TransportError) as excinfo:
        _transport(handler).update_order(9, 0)

    assert str(excinfo.value) == "Index 9 is out of range"
    assert excinfo.value.status_code == 400


def test_unsuccessful_body_is_an_error_even_with_200():
    def handler(request):
        return httpx.Response(200, json={"success": False, "message": "nope"})

    with pytest.raises(TransportError, match="nope"):
        _transport(handler).reset_order()


def test_timeout_is_a_transport_error():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(TransportError, match="timed out"):
        _transport(handler).fetch_stats()


def test_non_json_response():
    def handler(request):
        return httpx.Response(502, text="<html>bad gateway</html>")

    with pytest.raises(TransportError) as excinfo:
        _transport(handler).fetch_items(1, 20, "")
    assert excinfo.value.status_code == 502


def test_fetch_selected():
    def handler(request):
        assert request.url.path == "/items/selected"
        return httpx.Response(200, json={"selectedItems": [], "count": 0})

    assert _transport(handler).fetch_selected() == {"selectedItems": [], "count": 0}
