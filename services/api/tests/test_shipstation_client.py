import base64

import pytest

from tradeshow.services.shipstation_client import ShipStationError

from fakes import FakeShipStation


@pytest.mark.asyncio
async def test_fetch_all_walks_every_page_with_basic_auth():
    """Every page is fetched with Basic auth."""
    carrier = FakeShipStation(shipments=[{"shipmentId": i} for i in range(5)])

    shipments = await carrier.client().fetch_all_shipments(page_size=2, max_pages=20)

    assert [s["shipmentId"] for s in shipments] == [0, 1, 2, 3, 4]
    assert [r.url.params["page"] for r in carrier.requests] == ["1", "2", "3"]

    request = carrier.requests[0]
    expected = base64.b64encode(b"key:secret").decode()
    assert request.headers["Authorization"] == f"Basic {expected}"
    assert request.url.params["sortBy"] == "ShipDate"
    assert request.url.params["sortDir"] == "DESC"


@pytest.mark.asyncio
async def test_fetch_all_respects_page_ceiling():
    """Fetching stops at max_pages."""
    carrier = FakeShipStation(shipments=[{"shipmentId": i} for i in range(10)])

    shipments = await carrier.client().fetch_all_shipments(page_size=2, max_pages=2)

    assert len(shipments) == 4
    assert len(carrier.requests) == 2


@pytest.mark.asyncio
async def test_sleeps_between_pages(monkeypatch: pytest.MonkeyPatch):
    """The client pauses between pages."""
    from tradeshow.services import shipstation_client

    delays: list[float] = []

    async def fake_sleep(seconds: float) -> None:
        delays.append(seconds)

    monkeypatch.setattr(shipstation_client.asyncio, "sleep", fake_sleep)
    carrier = FakeShipStation(shipments=[{"shipmentId": i} for i in range(3)])
    client = carrier.client()
    client.page_delay_seconds = 0.2

    await client.fetch_all_shipments(page_size=1, max_pages=20)

    assert delays == [0.2, 0.2]


@pytest.mark.asyncio
async def test_http_errors_are_wrapped():
    """HTTP failures surface as ShipStationError."""
    carrier = FakeShipStation(fail=True)
    with pytest.raises(ShipStationError, match="401"):
        await carrier.client().fetch_all_shipments()
