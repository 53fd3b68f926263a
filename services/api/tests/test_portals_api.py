import re

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tradeshow.main import app
from tradeshow.models import Customer, Portal, PortalAttachment, PortalItem
from tradeshow.stores.postgres import get_session

ITEMS = [
    {"styleNumber": "ST-1", "color": "Red", "size": "S", "quantity": 2, "price": 10},
    {"styleNumber": "ST-1", "color": "Red", "size": "M", "quantity": 3, "price": 10},
    {"styleNumber": "ST-1", "color": "Blue", "size": "S", "quantity": 1, "price": 10},
]


async def _create(client, **overrides) -> dict:
    body = {"customerName": "Acme Co", "tradeShowName": "Magic Vegas", **overrides}
    response = await client.post("/api/portals/create", json=body)
    assert response.status_code == 200, response.text
    return response.json()["portal"]


@pytest.mark.asyncio
async def test_create_portal_for_new_customer(client):
    """Creating a portal for a new customer."""
    response = await client.post(
        "/api/portals/create",
        json={"customerName": "Acme Co", "customerEmail": "buyer@acme.test", "isNewCustomer": True},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert re.fullmatch(r"[a-z0-9]{12}", data["portal"]["uniqueLink"])
    assert data["portal"]["status"] == "active"

    async with get_session() as session:
        customer = (await session.execute(select(Customer))).scalar_one()
        portal = (await session.execute(select(Portal))).scalar_one()
    assert customer.is_local_only is True
    assert customer.country == "USA"
    assert portal.customer_id == customer.id
    assert portal.is_new_customer is True


@pytest.mark.asyncio
async def test_create_portal_requires_customer_name(client):
    """Customer name is required."""
    response = await client.post("/api/portals/create", json={"customerName": "   "})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Customer name is required"}


@pytest.mark.asyncio
async def test_view_portal_groups_items_into_matrix(client):
    """Portal view returns the order matrix."""
    portal = await _create(client, items=ITEMS)

    response = await client.get(f"/api/portals/{portal['uniqueLink']}")

    assert response.status_code == 200
    view = response.json()["portal"]
    assert view["customer_name"] == "Acme Co"
    assert len(view["items"]) == 3
    assert view["files"] == []
    (group,) = view["productGroups"]
    assert group["colors"] == ["Red", "Blue"]
    assert group["sizes"] == ["S", "M"]
    assert "Blue|M" not in group["matrix"]
    assert group["totalQuantity"] == 6
    assert view["grandTotal"] == 60.0


@pytest.mark.asyncio
async def test_unknown_link_is_404(client):
    """Unknown link answers 404."""
    response = await client.get("/api/portals/doesnotexist")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Portal not found"}


@pytest.mark.asyncio
async def test_confirm_portal(client):
    """Public confirm marks the portal confirmed."""
    portal = await _create(client)

    response = await client.post(f"/api/portals/{portal['uniqueLink']}/confirm")

    assert response.json() == {"success": True}
    view = (await client.get(f"/api/portals/{portal['uniqueLink']}")).json()["portal"]
    assert view["status"] == "confirmed"


@pytest.mark.asyncio
async def test_list_filters_and_trade_shows(client):
    """Listing filters and distinct trade shows."""
    await _create(client, customerName="Zeta", tradeShowName="Magic Vegas", isNewCustomer=True)
    await _create(client, customerName="Alpha", tradeShowName="Coterie")
    await _create(client, customerName="Mid", tradeShowName=None)

    everything = (await client.get("/api/portals/list", params={"sortBy": "customer_name", "sortOrder": "asc"})).json()
    assert [p["customer_name"] for p in everything["portals"]] == ["Alpha", "Mid", "Zeta"]
    assert everything["count"] == 3
    assert everything["filters"]["tradeShows"] == ["Coterie", "Magic Vegas"]
    assert everything["portals"][0]["url"].startswith("/portal/")

    vegas = (await client.get("/api/portals/list", params={"tradeShow": "Magic Vegas"})).json()
    assert [p["customer_name"] for p in vegas["portals"]] == ["Zeta"]

    new = (await client.get("/api/portals/list", params={"customerType": "new"})).json()
    existing = (await client.get("/api/portals/list", params={"customerType": "existing"})).json()
    assert [p["customer_name"] for p in new["portals"]] == ["Zeta"]
    assert {p["customer_name"] for p in existing["portals"]} == {"Alpha", "Mid"}


@pytest.mark.asyncio
async def test_update_status_validates(client):
    """Status updates reject unknown statuses."""
    portal = await _create(client)

    ok = await client.post("/api/portals/update-status", json={"portalId": portal["id"], "status": "shipped"})
    bad = await client.post("/api/portals/update-status", json={"portalId": portal["id"], "status": "bogus"})
    missing = await client.post("/api/portals/update-status", json={"status": "active"})
    unknown = await client.post("/api/portals/update-status", json={"portalId": 9999, "status": "active"})

    assert ok.json() == {"success": True}
    assert bad.status_code == 400
    assert bad.json()["error"].startswith("Invalid status")
    assert missing.status_code == 400
    assert unknown.status_code == 404

    listed = (await client.get("/api/portals/list", params={"status": "shipped"})).json()
    assert listed["count"] == 1


@pytest.mark.asyncio
async def test_delete_removes_children(client):
    """Deleting a portal removes it and its items."""
    portal = await _create(client, items=ITEMS)

    response = await client.request("DELETE", "/api/portals/delete", json={"portalId": portal["id"]})

    assert response.json() == {"success": True}
    async with get_session() as session:
        assert (await session.execute(select(Portal))).scalars().all() == []
        assert (await session.execute(select(PortalItem))).scalars().all() == []
    assert (await client.get(f"/api/portals/{portal['uniqueLink']}")).status_code == 404


@pytest.mark.asyncio
async def test_upload_attachment(client, upload_dir):
    """Uploads are stored and listed."""
    portal = await _create(client)

    response = await client.post(
        "/api/portals/upload",
        data={"portalId": str(portal["id"])},
        files={"file": ("booth.jpg", b"\xff\xd8fake-jpeg", "image/jpeg")},
    )

    assert response.status_code == 200, response.text
    url = response.json()["url"]
    assert url.startswith(f"/files/{portal['id']}/") and url.endswith(".jpg")
    stored = list((upload_dir / str(portal["id"])).iterdir())
    assert len(stored) == 1
    assert stored[0].read_bytes() == b"\xff\xd8fake-jpeg"

    async with get_session() as session:
        attachment = (await session.execute(select(PortalAttachment))).scalar_one()
    assert attachment.file_type == "photo"
    assert attachment.file_name == "booth.jpg"
    assert attachment.file_size == len(b"\xff\xd8fake-jpeg")

    view = (await client.get(f"/api/portals/{portal['uniqueLink']}")).json()["portal"]
    assert [f["file_url"] for f in view["files"]] == [url]


@pytest.mark.asyncio
async def test_upload_removes_file_when_commit_fails(client, upload_dir, monkeypatch: pytest.MonkeyPatch):
    """A failed commit leaves no orphaned file on disk."""
    portal = await _create(client)

    async def failing_commit(self) -> None:
        raise RuntimeError("database went away")

    monkeypatch.setattr(AsyncSession, "commit", failing_commit)
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as ac:
        response = await ac.post(
            "/api/portals/upload",
            data={"portalId": str(portal["id"])},
            files={"file": ("booth.jpg", b"\xff\xd8fake-jpeg", "image/jpeg")},
        )

    assert response.status_code == 500
    assert list((upload_dir / str(portal["id"])).iterdir()) == []


@pytest.mark.asyncio
async def test_upload_to_unknown_portal_is_404(client, upload_dir):
    """Upload to a missing portal answers 404."""
    response = await client.post(
        "/api/portals/upload",
        data={"portalId": "9999"},
        files={"file": ("linesheet.pdf", b"%PDF", "application/pdf")},
    )

    assert response.status_code == 404
    assert not upload_dir.exists() or not any(upload_dir.iterdir())


@pytest.mark.asyncio
async def test_admin_portal_endpoints(client):
    """Admin list, status and delete endpoints."""
    first = await _create(client, customerName="First")
    await _create(client, customerName="Second")

    listed = (await client.get("/api/admin/portals")).json()
    assert listed["success"] is True
    assert {p["customer_name"] for p in listed["portals"]} == {"First", "Second"}

    updated = await client.put("/api/admin/portals/status", json={"portalId": first["id"], "status": "completed"})
    assert updated.status_code == 200
    assert updated.json()["portal"]["status"] == "completed"

    deleted = await client.post("/api/admin/portals/delete", json={"portalId": first["id"]})
    assert deleted.json()["success"] is True
    remaining = (await client.get("/api/admin/portals")).json()["portals"]
    assert [p["customer_name"] for p in remaining] == ["Second"]
