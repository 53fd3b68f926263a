import pytest

from tradeshow.services.apparelmagic_client import ApparelMagicError

from fakes import FakeApparelMagic


@pytest.mark.asyncio
async def test_fetch_all_follows_cursor_until_exhausted():
    """Pagination follows last_id until no cursor comes back."""
    erp = FakeApparelMagic(collections={"customers": [{"customer_id": str(i)} for i in range(5)]})
    client = erp.client()

    records = await client.fetch_all("customers", page_size=2, max_pages=20)

    assert [r["customer_id"] for r in records] == ["0", "1", "2", "3", "4"]
    assert len(erp.requests) == 3
    first, second = erp.requests[0], erp.requests[1]
    assert "pagination[last_id]" not in first.url.params
    assert second.url.params["pagination[last_id]"] == "2"


@pytest.mark.asyncio
async def test_requests_carry_token_time_and_user_agent():
    """Auth params and User-Agent are sent on every request."""
    erp = FakeApparelMagic(collections={"orders": []})
    await erp.client().fetch_all("orders", page_size=200, max_pages=200)

    request = erp.requests[0]
    assert request.url.params["token"] == "test-token"
    assert request.url.params["time"].isdigit()
    assert request.url.params["pagination[page_size]"] == "200"
    assert request.headers["User-Agent"] == "TradeShowPortal/1.0"


@pytest.mark.asyncio
async def test_fetch_all_stops_at_page_ceiling():
    """Fetching stops at max_pages."""
    erp = FakeApparelMagic(collections={"products": [{"product_id": str(i)} for i in range(10)]})

    records = await erp.client().fetch_all("products", page_size=2, max_pages=3)

    assert len(records) == 6
    assert len(erp.requests) == 3


@pytest.mark.asyncio
async def test_http_errors_are_wrapped():
    """HTTP failures surface as ApparelMagicError."""
    erp = FakeApparelMagic(failing={"invoices"})
    with pytest.raises(ApparelMagicError, match="503"):
        await erp.client().fetch_all("invoices", page_size=200, max_pages=200)


@pytest.mark.asyncio
async def test_colorway_images_and_skus():
    """SKU and colorway lookups return flat lists."""
    erp = FakeApparelMagic(
        skus={"P1": [{"sku_id": "S1"}]},
        colorways={"P1": [{"images": [{"img": "https://cdn/red.jpg"}, {"img": None}]}, {"images": None}]},
    )
    client = erp.client()

    assert await client.get_product_skus("P1") == [{"sku_id": "S1"}]
    assert await client.get_colorway_images("P1") == ["https://cdn/red.jpg"]
    assert erp.requests[-1].url.params["product_id"] == "P1"


@pytest.mark.asyncio
async def test_colorway_images_skip_malformed_entries():
    """Non-object colorways are ignored rather than failing the product."""
    erp = FakeApparelMagic(colorways={"P1": ["oops", None, {"images": [{"img": "https://cdn/blue.jpg"}]}]})

    assert await erp.client().get_colorway_images("P1") == ["https://cdn/blue.jpg"]
