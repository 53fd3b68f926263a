"""Tests for health endpoint and the error envelope."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """Test health endpoint returns ok."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


@pytest.mark.asyncio
async def test_validation_errors_use_envelope(client: AsyncClient):
    """Malformed bodies come back as 400 with success=false."""
    response = await client.post("/api/portals/create", json={"customerName": "Acme", "items": [{"quantity": 1}]})
    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert "styleNumber" in data["error"]


@pytest.mark.asyncio
async def test_unknown_route_uses_envelope(client: AsyncClient):
    """Unknown routes answer with the error envelope."""
    response = await client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json()["success"] is False
