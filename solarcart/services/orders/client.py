"""HTTP client for the backend order subsystem."""

from typing import Any
from urllib.parse import quote

import httpx

from solarcart.common.logging import logger


class OrderClient:
    """Reads order and payment status records from the backend."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = dict(headers or {})
        self.transport = transport

    def with_headers(self, headers: dict[str, str]) -> "OrderClient":
        """Copy of this client that forwards the shopper's auth headers."""

        return OrderClient(self.base_url, self.timeout, {**self.headers, **headers}, self.transport)

    async def _get(self, path: str) -> dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            resp = await client.get(f"{self.base_url}{path}", headers=self.headers)
        if resp.status_code >= 400:
            logger.error("order_request_failed path=%s status=%s", path, resp.status_code)
        resp.raise_for_status()
        return resp.json()

    async def fetch_order(self, order_id: str) -> dict[str, Any]:
        if not order_id:
            raise ValueError("Order ID is required")
        return await self._get(f"/api/orders/{quote(order_id, safe='')}")

    async def fetch_payment_status(self, order_id: str) -> dict[str, Any]:
        if not order_id:
            raise ValueError("Order ID is required")
        return await self._get(f"/api/orders/{quote(order_id, safe='')}/payment")
