"""Entity sync descriptors and the sync-all runner.

Page sizes and page ceilings per collection:
- customers      500 x 20
- products      1000 x 10  (+ SKUs and colorway images per product)
- inventory     1000 x 100 (updates existing SKUs only)
- orders         200 x 200 (+ line items)
- invoices       200 x 200
- pick_tickets   200 x 200
- shipments      500 x 20  (ShipStation)
"""

import logging
import time
from typing import Any

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from tradeshow.models import Customer, Invoice, Order, OrderItem, PickTicket, Product, ProductImage, ProductSku, Shipment
from tradeshow.services import field_mapper
from tradeshow.services.apparelmagic_client import ApparelMagicClient, ApparelMagicError
from tradeshow.services.shipstation_client import ShipStationClient
from tradeshow.services.sync_engine import EntitySync, SyncClients, SyncContext, SyncSummary, run_sync

logger = logging.getLogger("uvicorn.error")


def _erp(clients: SyncClients) -> ApparelMagicClient:
    if clients.apparelmagic is None:
        raise RuntimeError("ApparelMagic client is not configured")
    return clients.apparelmagic


def _carrier(clients: SyncClients) -> ShipStationClient:
    if clients.shipstation is None:
        raise RuntimeError("ShipStation client is not configured")
    return clients.shipstation


def _erp_fetcher(entity: str, page_size: int, max_pages: int):
    async def fetch(clients: SyncClients) -> list[dict[str, Any]]:
        return await _erp(clients).fetch_all(entity, page_size=page_size, max_pages=max_pages)

    return fetch


async def _fetch_shipments(clients: SyncClients) -> list[dict[str, Any]]:
    return await _carrier(clients).fetch_all_shipments(page_size=500, max_pages=20)


# ============================================================
# Products: images + SKUs
# ============================================================


async def _prepare_product(context: SyncContext, record: dict[str, Any]) -> dict[str, list]:
    """Fetch SKUs and colorway images for a product; lookup failures leave them empty."""
    client = _erp(context.clients)
    product_id = str(record.get("product_id") or "")

    skus: list[dict[str, Any]] = []
    try:
        skus = await client.get_product_skus(product_id)
    except ApparelMagicError as e:
        logger.warning(f"Could not fetch SKUs for product {product_id}: {e}")

    colorway_urls: list[str] = []
    try:
        colorway_urls = await client.get_colorway_images(product_id)
    except ApparelMagicError as e:
        logger.warning(f"Could not fetch colorway images for product {product_id}: {e}")

    return {"skus": skus, "images": field_mapper.collect_product_images(record, colorway_urls)}


async def _replace_product_children(
    session: AsyncSession,
    context: SyncContext,
    pk: int,
    record: dict[str, Any],
    values: dict[str, Any],
    prepared: dict[str, list],
) -> None:
    product_id = values["product_id"]

    await session.execute(delete(ProductImage).where(ProductImage.product_id == product_id))
    for sort_order, url in enumerate(prepared["images"]):
        session.add(ProductImage(product_id=product_id, image_url=url, sort_order=sort_order))
    context.count("images", len(prepared["images"]))

    # Keep the stored SKUs when the ERP returned none (lookup failed or not yet set up)
    if not prepared["skus"]:
        return
    await session.execute(delete(ProductSku).where(ProductSku.product_id == product_id))
    await session.flush()
    synced_at = values.get("last_synced_at")
    for sku in prepared["skus"]:
        sku_values = field_mapper.map_sku(sku, record)
        if not sku_values["sku_id"]:
            continue
        session.add(ProductSku(**sku_values, last_synced_at=synced_at))
        context.count("skus")


# ============================================================
# Orders: line items
# ============================================================


async def _replace_order_items(
    session: AsyncSession,
    context: SyncContext,
    pk: int,
    record: dict[str, Any],
    values: dict[str, Any],
    prepared: Any,
) -> None:
    items = record.get("order_items")
    if not isinstance(items, list):
        return

    await session.execute(delete(OrderItem).where(OrderItem.order_id == pk))
    synced_at = values.get("last_synced_at")
    for item in items:
        session.add(OrderItem(**field_mapper.map_order_item(item, pk, values["apparel_magic_id"]), last_synced_at=synced_at))
        context.count("items_created")


# ============================================================
# Descriptors
# ============================================================

CUSTOMERS = EntitySync(
    sync_type="customers",
    source="apparel_magic",
    model=Customer,
    key="am_customer_id",
    fetch=_erp_fetcher("customers", page_size=500, max_pages=20),
    mapper=field_mapper.map_customer,
)

PRODUCTS = EntitySync(
    sync_type="products",
    source="apparel_magic",
    model=Product,
    key="product_id",
    fetch=_erp_fetcher("products", page_size=1000, max_pages=10),
    mapper=field_mapper.map_product,
    prepare=_prepare_product,
    children=_replace_product_children,
)

INVENTORY = EntitySync(
    sync_type="inventory",
    source="apparel_magic",
    model=ProductSku,
    key="sku_id",
    fetch=_erp_fetcher("inventory", page_size=1000, max_pages=100),
    mapper=field_mapper.map_inventory,
    create_missing=False,
)

ORDERS = EntitySync(
    sync_type="orders",
    source="apparel_magic",
    model=Order,
    key="apparel_magic_id",
    fetch=_erp_fetcher("orders", page_size=200, max_pages=200),
    mapper=field_mapper.map_order,
    needs_lookups=True,
    children=_replace_order_items,
)

INVOICES = EntitySync(
    sync_type="invoices",
    source="apparel_magic",
    model=Invoice,
    key="apparel_magic_id",
    fetch=_erp_fetcher("invoices", page_size=200, max_pages=200),
    mapper=field_mapper.map_invoice,
    needs_lookups=True,
)

PICK_TICKETS = EntitySync(
    sync_type="pick_tickets",
    source="apparel_magic",
    model=PickTicket,
    key="pick_ticket_id",
    fetch=_erp_fetcher("pick_tickets", page_size=200, max_pages=200),
    mapper=field_mapper.map_pick_ticket,
    needs_lookups=True,
)

SHIPMENTS = EntitySync(
    sync_type="shipments",
    source="shipstation",
    model=Shipment,
    key="shipstation_id",
    fetch=_fetch_shipments,
    mapper=field_mapper.map_shipment,
    needs_lookups=True,
)

ENTITY_SYNCS: dict[str, EntitySync] = {
    entity.sync_type: entity
    for entity in (CUSTOMERS, PRODUCTS, INVENTORY, ORDERS, INVOICES, PICK_TICKETS, SHIPMENTS)
}

# Parents before children: orders need customers, invoices/shipments need orders
SYNC_ALL_ORDER = ["customers", "products", "inventory", "orders", "invoices", "pick_tickets", "shipments"]


async def sync_all(session: AsyncSession, clients: SyncClients) -> dict[str, Any]:
    """Run every sync in dependency order; a failed step does not stop later ones."""
    started = time.monotonic()
    results: dict[str, SyncSummary] = {}

    logger.info("Starting full data sync...")
    for step, sync_type in enumerate(SYNC_ALL_ORDER, start=1):
        logger.info(f"{step}. Syncing {sync_type}...")
        summary = await run_sync(session, ENTITY_SYNCS[sync_type], clients)
        results[sync_type] = summary
        if not summary.success:
            logger.warning(f"   {sync_type} failed: {summary.error}")

    duration = round(time.monotonic() - started, 2)
    logger.info(f"Full sync complete in {duration} seconds")

    return {
        "success": all(summary.success for summary in results.values()),
        "duration_seconds": duration,
        "results": {sync_type: summary.to_dict() for sync_type, summary in results.items()},
    }
