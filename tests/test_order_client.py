"""Tests for the order subsystem HTTP client."""

import asyncio

import httpx
import pytest

from solarcart.services.orders.client import OrderClient


def make_client(status_code: int = 200):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(status_code, json={"success": status_code < 400, "data": {"order_id": "ORD-1"}})

    return OrderClient("http://backend.test/", transport=httpx.MockTransport(handler)), seen


def test_fetch_order_and_payment_status_paths():
    client, seen = make_client()

    asyncio.run(client.fetch_order("ORD-1"))
    asyncio.run(client.fetch_payment_status("ORD-1"))

    assert [str(r.url) for r in seen] == [
        "http://backend.test/api/orders/ORD-1",
        "http://backend.test/api/orders/ORD-1/payment",
    ]


def test_order_id_is_path_escaped():
    client, seen = make_client()
    asyncio.run(client.fetch_order("ORD/../1"))
    assert seen[0].url.raw_path == b"/api/orders/ORD%2F..%2F1"


def test_with_headers_forwards_credentials():
    client, seen = make_client()
    asyncio.run(client.with_headers({"authorization": "Bearer abc"}).fetch_order("ORD-1"))
    assert seen[0].headers["authorization"] == "Bearer abc"
    assert client.headers == {}


def test_error_status_raises():
    client, _ = make_client(status_code=404)
    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.fetch_order("ORD-1"))


@pytest.mark.parametrize("operation", ["fetch_order", "fetch_payment_status"])
def test_order_id_required(operation):
    client, seen = make_client()
    with pytest.raises(ValueError, match="Order ID is required"):
        asyncio.run(getattr(client, operation)(""))
    assert seen == []
