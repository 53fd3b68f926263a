import pytest
import pytest_asyncio

from tradeshow.models import Customer, CustomerLocation, Product, ProductImage, ProductSku
from tradeshow.services.catalog import rank_customers


def test_rank_customers_exact_then_prefix_then_alpha():
    """Exact matches sort before prefix matches, then by name."""
    customers = [{"customer_name": n} for n in ["Big Acme", "Acme Outlet", "acme", "Zed Acme"]]

    ranked = [c["customer_name"] for c in rank_customers(customers, "Acme")]

    assert ranked == ["acme", "Acme Outlet", "Big Acme", "Zed Acme"]


@pytest_asyncio.fixture
async def catalog(session):
    acme = Customer(am_customer_id="C1", customer_name="Acme", email="buyer@acme.test")
    outlet = Customer(am_customer_id="C2", customer_name="Acme Outlet", account_number="ACC-9")
    big = Customer(am_customer_id="C3", customer_name="Big Acme")
    gone = Customer(am_customer_id="C4", customer_name="Aardvark", is_active=False)
    session.add_all([acme, outlet, big, gone])
    await session.flush()

    session.add_all(
        [
            CustomerLocation(ship_to_id="L2", customer_id=acme.id, am_customer_id="C1", location_name="Warehouse"),
            CustomerLocation(
                ship_to_id="L1", customer_id=acme.id, am_customer_id="C1", location_name="Store 1", is_main_location=True
            ),
            Product(product_id="P1", style_number="ST-100", description="Linen shirt", category="Tops", price=40),
            Product(product_id="P2", style_number="ST-200", description="Denim jacket", category="Outerwear", price=90),
            ProductImage(product_id="P1", image_url="https://cdn/p1-b.jpg", sort_order=1),
            ProductImage(product_id="P1", image_url="https://cdn/p1-a.jpg", sort_order=0),
            ProductSku(sku_id="S2", product_id="P1", attr_2="White", size="M"),
            ProductSku(sku_id="S1", product_id="P1", attr_2="Blue", size="S"),
        ]
    )
    await session.commit()
    return {"acme": acme.id}


@pytest.mark.asyncio
async def test_customer_search_ranks_matches(client, catalog):
    """Customer search returns ranked matches."""
    response = await client.get("/api/customers/search", params={"q": "acme"})

    data = response.json()
    assert data["success"] is True
    assert [c["customer_name"] for c in data["customers"]] == ["Acme", "Acme Outlet", "Big Acme"]


@pytest.mark.asyncio
async def test_customer_search_matches_account_number(client, catalog):
    """Customer search also matches account numbers."""
    data = (await client.get("/api/customers/search", params={"q": "acc-9"})).json()

    assert [c["customer_name"] for c in data["customers"]] == ["Acme Outlet"]


@pytest.mark.asyncio
async def test_short_query_lists_active_customers(client, catalog):
    """A short query lists active customers."""
    data = (await client.get("/api/customers/search", params={"q": "a"})).json()

    names = [c["customer_name"] for c in data["customers"]]
    assert names == ["Acme", "Acme Outlet", "Big Acme"]
    assert "Aardvark" not in names


@pytest.mark.asyncio
async def test_locations_main_first(client, catalog):
    """The main location comes first."""
    by_pk = (await client.get("/api/customers/locations", params={"customer_id": catalog["acme"]})).json()
    by_erp = (await client.get("/api/customers/locations", params={"am_customer_id": "C1"})).json()

    assert [loc["location_name"] for loc in by_pk["locations"]] == ["Store 1", "Warehouse"]
    assert by_erp["count"] == 2


@pytest.mark.asyncio
async def test_locations_require_an_id(client):
    """Locations need a customer id."""
    response = await client.get("/api/customers/locations")

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "customer_id or am_customer_id is required"}


@pytest.mark.asyncio
async def test_product_search_with_images(client, catalog):
    """Product search includes images."""
    data = (await client.get("/api/products/search", params={"q": "linen"})).json()

    (product,) = data["products"]
    assert product["style_number"] == "ST-100"
    assert product["images"] == [{"img": "https://cdn/p1-a.jpg"}, {"img": "https://cdn/p1-b.jpg"}]

    everything = (await client.get("/api/products/search", params={"all": "true"})).json()
    assert [p["style_number"] for p in everything["products"]] == ["ST-100", "ST-200"]
    assert everything["products"][1]["images"] == []


@pytest.mark.asyncio
async def test_product_skus(client, catalog):
    """SKU listing for a product."""
    data = (await client.get("/api/products/skus", params={"product_id": "P1"})).json()
    assert [s["sku_id"] for s in data["skus"]] == ["S1", "S2"]

    missing = await client.get("/api/products/skus")
    assert missing.status_code == 400
