"""Read-only catalog lookups used by the portal creation wizard."""

import logging
from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from tradeshow.models import Customer, CustomerLocation, Product, ProductImage, ProductSku
from tradeshow.stores.postgres import row_to_dict

logger = logging.getLogger("uvicorn.error")

MIN_QUERY_LENGTH = 2


def rank_customers(customers: list[dict[str, Any]], term: str) -> list[dict[str, Any]]:
    """Order matches: exact name, then name prefix, then alphabetical."""
    term = term.lower()

    def sort_key(customer: dict[str, Any]) -> tuple[int, str]:
        name = (customer.get("customer_name") or "").lower()
        if name == term:
            return 0, name
        if name.startswith(term):
            return 1, name
        return 2, name

    return sorted(customers, key=sort_key)


async def search_customers(session: AsyncSession, query: str, limit: int = 20) -> list[dict[str, Any]]:
    """Search customers by name, email or account number.

    Queries shorter than two characters return active customers by name.
    """
    term = query.strip().lower()
    if len(term) < MIN_QUERY_LENGTH:
        result = await session.execute(
            select(Customer).where(Customer.is_active.is_(True)).order_by(Customer.customer_name).limit(limit)
        )
        return [row_to_dict(customer) for customer in result.scalars().all()]

    pattern = f"%{term}%"
    result = await session.execute(
        select(Customer)
        .where(
            or_(
                Customer.customer_name.ilike(pattern),
                Customer.email.ilike(pattern),
                Customer.account_number.ilike(pattern),
            )
        )
        .order_by(Customer.customer_name)
        .limit(limit)
    )
    customers = rank_customers([row_to_dict(customer) for customer in result.scalars().all()], term)
    logger.info(f"Found {len(customers)} customers matching {query!r}")
    return customers


async def get_locations(
    session: AsyncSession,
    customer_id: int | None = None,
    am_customer_id: str | None = None,
) -> list[dict[str, Any]]:
    """Ship-to locations for a customer, main location first."""
    query = select(CustomerLocation).order_by(
        CustomerLocation.is_main_location.desc(),
        CustomerLocation.location_name.asc(),
    )
    if customer_id is not None:
        query = query.where(CustomerLocation.customer_id == customer_id)
    else:
        query = query.where(CustomerLocation.am_customer_id == am_customer_id)

    result = await session.execute(query)
    return [row_to_dict(location) for location in result.scalars().all()]


async def search_products(session: AsyncSession, query: str | None = None, show_all: bool = False) -> list[dict[str, Any]]:
    """Products by style number, description or category, each with its images."""
    stmt = select(Product).order_by(Product.style_number.asc())
    term = (query or "").strip()
    if term and not show_all:
        pattern = f"%{term}%"
        stmt = stmt.where(
            or_(
                Product.style_number.ilike(pattern),
                Product.description.ilike(pattern),
                Product.category.ilike(pattern),
            )
        )
    stmt = stmt.limit(200 if show_all else 100)

    result = await session.execute(stmt)
    products = [row_to_dict(product) for product in result.scalars().all()]
    if not products:
        return []

    images_result = await session.execute(
        select(ProductImage)
        .where(ProductImage.product_id.in_([product["product_id"] for product in products]))
        .order_by(ProductImage.product_id, ProductImage.sort_order)
    )
    images_by_product: dict[str, list[dict[str, str]]] = {}
    for image in images_result.scalars().all():
        images_by_product.setdefault(image.product_id, []).append({"img": image.image_url})

    for product in products:
        product["images"] = images_by_product.get(product["product_id"], [])
    return products


async def get_product_skus(session: AsyncSession, product_id: str) -> list[dict[str, Any]]:
    """SKUs of one product ordered by color then size."""
    result = await session.execute(
        select(ProductSku)
        .where(ProductSku.product_id == product_id)
        .order_by(ProductSku.attr_2.asc(), ProductSku.size.asc())
    )
    return [row_to_dict(sku) for sku in result.scalars().all()]
