"""Product catalog endpoints."""

from typing import Any

from fastapi import APIRouter, HTTPException, Query

from tradeshow.services.catalog import get_product_skus, search_products
from tradeshow.stores.postgres import get_session

router = APIRouter()


@router.get("/search")
async def search(q: str | None = None, all_flag: str | None = Query(default=None, alias="all")) -> dict[str, Any]:
    """Search by style number, description or category; `all` lists up to 200 products."""
    show_all = bool(all_flag) and all_flag.lower() not in ("0", "false")
    async with get_session() as session:
        products = await search_products(session, q, show_all=show_all)
    return {"success": True, "products": products, "total": len(products)}


@router.get("/skus")
async def skus(product_id: str | None = None) -> dict[str, Any]:
    if not product_id:
        raise HTTPException(status_code=400, detail="product_id is required")

    async with get_session() as session:
        rows = await get_product_skus(session, product_id)
    return {"success": True, "skus": rows}
