"""Fake ApparelMagic and ShipStation APIs served through httpx.MockTransport."""

from typing import Any

import httpx

from tradeshow.services.apparelmagic_client import ApparelMagicClient
from tradeshow.services.shipstation_client import ShipStationClient

ERP_BASE_URL = "https://erp.test/api/json"
SHIPSTATION_BASE_URL = "https://ssapi.test"


class FakeApparelMagic:
    """In-memory ApparelMagic API served through httpx.MockTransport.

    Collections page by offset: the cursor handed back in meta.pagination.last_id
    is the index of the next record.
    """

    def __init__(
        self,
        collections: dict[str, list[dict[str, Any]]] | None = None,
        skus: dict[str, list[dict[str, Any]]] | None = None,
        colorways: dict[str, list[dict[str, Any]]] | None = None,
        failing: set[str] | None = None,
    ):
        self.collections = collections or {}
        self.skus = skus or {}
        self.colorways = colorways or {}
        self.failing = failing or set()
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api/json/")
        params = request.url.params

        if path in self.failing:
            return httpx.Response(503, text="Service Unavailable")
        if path.startswith("products/") and path.endswith("/skus"):
            product_id = path.split("/")[1]
            return httpx.Response(200, json={"response": self.skus.get(product_id, [])})
        if path == "product_attributes":
            return httpx.Response(200, json={"response": self.colorways.get(params.get("product_id"), [])})

        records = self.collections.get(path, [])
        size = int(params.get("pagination[page_size]", "100"))
        start = int(params.get("pagination[last_id]", "0"))
        page = records[start : start + size]
        end = start + len(page)
        pagination = {"last_id": str(end)} if end < len(records) else {}
        return httpx.Response(200, json={"response": page, "meta": {"pagination": pagination}})

    def client(self) -> ApparelMagicClient:
        return ApparelMagicClient(
            api_key="test-token",
            base_url=ERP_BASE_URL,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(self.handler)),
        )


class FakeShipStation:
    """In-memory ShipStation shipments endpoint."""

    def __init__(self, shipments: list[dict[str, Any]] | None = None, fail: bool = False):
        self.shipments = shipments or []
        self.fail = fail
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail:
            return httpx.Response(401, text="Unauthorized")
        page = int(request.url.params.get("page", "1"))
        size = int(request.url.params.get("pageSize", "100"))
        pages = max(1, -(-len(self.shipments) // size))
        batch = self.shipments[(page - 1) * size : page * size]
        return httpx.Response(200, json={"shipments": batch, "page": page, "pages": pages})

    def client(self) -> ShipStationClient:
        return ShipStationClient(
            api_key="key",
            api_secret="secret",
            base_url=SHIPSTATION_BASE_URL,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(self.handler)),
            page_delay_seconds=0,
        )


