"""Customer lookup endpoints for the portal creation wizard."""

from typing import Any

from fastapi import APIRouter, HTTPException, Query

from tradeshow.services.catalog import get_locations, search_customers
from tradeshow.stores.postgres import get_session

router = APIRouter()


@router.get("/search")
async def search(
    q: str = "",
    limit: int = Query(default=20, ge=1, le=200),
) -> dict[str, Any]:
    """Ranked customer search (exact name, then prefix, then alphabetical)."""
    async with get_session() as session:
        customers = await search_customers(session, q, limit=limit)
    return {"success": True, "customers": customers, "count": len(customers)}


@router.get("/locations")
async def locations(
    customer_id: int | None = None,
    am_customer_id: str | None = None,
) -> dict[str, Any]:
    """Ship-to locations by local or ERP customer id."""
    if customer_id is None and not am_customer_id:
        raise HTTPException(status_code=400, detail="customer_id or am_customer_id is required")

    async with get_session() as session:
        rows = await get_locations(session, customer_id=customer_id, am_customer_id=am_customer_id)
    return {"success": True, "locations": rows, "count": len(rows)}
