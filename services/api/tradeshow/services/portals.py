"""Portal service: create, list, view, confirm, status changes, delete.

Portals are locally owned; nothing here talks to the ERP. Routes translate
PortalError subclasses into {"success": false, "error": ...} responses.
"""

import logging
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from tradeshow.models import Customer, Portal, PortalAttachment, PortalItem, PortalStatus
from tradeshow.schemas.portal import PortalCreateRequest
from tradeshow.services.order_matrix import build_product_groups, grand_total
from tradeshow.services.portal_links import generate_unique_link
from tradeshow.settings import get_settings
from tradeshow.stores.postgres import row_to_dict

logger = logging.getLogger("uvicorn.error")

VALID_STATUSES = [status.value for status in PortalStatus]
SORTABLE_COLUMNS = {
    "created_at": Portal.created_at,
    "ship_date": Portal.ship_date,
    "customer_name": Portal.customer_name,
}


class PortalError(Exception):
    """Base error for portal operations."""

    status_code = 500


class PortalValidationError(PortalError):
    status_code = 400


class PortalNotFoundError(PortalError):
    status_code = 404


def _blank_to_none(value: str | None) -> str | None:
    return value if value else None


async def link_exists(session: AsyncSession, link: str) -> bool:
    result = await session.execute(select(Portal.id).where(Portal.unique_link == link))
    return result.scalar_one_or_none() is not None


async def create_portal(session: AsyncSession, request: PortalCreateRequest) -> Portal:
    """Create a portal (and a local-only customer when asked to).

    Raises:
        PortalValidationError: customer name missing or blank.
    """
    customer_name = (request.customer_name or "").strip()
    if not customer_name:
        raise PortalValidationError("Customer name is required")

    settings = get_settings()
    country = request.country or settings.default_country

    unique_link = await generate_unique_link(lambda link: link_exists(session, link))

    customer_id = request.customer_id
    if request.is_new_customer and not customer_id:
        customer = Customer(
            customer_name=customer_name,
            email=_blank_to_none(request.customer_email),
            phone=_blank_to_none(request.customer_phone),
            address_1=_blank_to_none(request.address_1),
            address_2=_blank_to_none(request.address_2),
            city=_blank_to_none(request.city),
            state=_blank_to_none(request.state),
            postal_code=_blank_to_none(request.postal_code),
            country=country,
            is_local_only=True,
            is_active=True,
        )
        session.add(customer)
        await session.flush()
        customer_id = customer.id
        logger.info(f"Created local-only customer {customer_id} ({customer_name})")

    portal = Portal(
        unique_link=unique_link,
        customer_id=customer_id,
        customer_name=customer_name,
        customer_email=_blank_to_none(request.customer_email),
        customer_phone=_blank_to_none(request.customer_phone),
        location_id=request.location_id,
        location_name=_blank_to_none(request.location_name),
        shipping_address_1=_blank_to_none(request.address_1),
        shipping_address_2=_blank_to_none(request.address_2),
        shipping_city=_blank_to_none(request.city),
        shipping_state=_blank_to_none(request.state),
        shipping_postal_code=_blank_to_none(request.postal_code),
        shipping_country=country,
        trade_show_name=_blank_to_none(request.trade_show_name),
        ship_date=_blank_to_none(request.ship_date),
        notes=_blank_to_none(request.notes),
        status=PortalStatus.ACTIVE.value,
        is_new_customer=request.is_new_customer,
    )
    session.add(portal)
    await session.flush()

    for item in request.items:
        session.add(
            PortalItem(
                portal_id=portal.id,
                product_id=item.product_id,
                sku_id=item.sku_id,
                style_number=item.style_number,
                attr_2=item.color,
                size=item.size,
                quantity=item.quantity,
                price=item.price,
                delivery_date=item.delivery_date,
                notes=item.notes,
                image_url=item.image_url,
            )
        )

    logger.info(f"Portal created: {unique_link} for {customer_name}")
    return portal


async def list_portals(
    session: AsyncSession,
    status: str | None = None,
    trade_show: str | None = None,
    customer_type: str | None = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    limit: int = 100,
) -> dict[str, Any]:
    """Filtered, sorted portal list plus the trade-show filter values.

    Args:
        status: Exact status, or "all"/None for any.
        trade_show: Exact trade show name, or "all"/None for any.
        customer_type: "new" or "existing"; anything else means both.
        sort_by: created_at | ship_date | customer_name (unknown -> created_at).
        sort_order: "asc" or "desc".
        limit: Maximum rows returned.
    """
    query = select(Portal)
    if status and status != "all":
        query = query.where(Portal.status == status)
    if trade_show and trade_show != "all":
        query = query.where(Portal.trade_show_name == trade_show)
    if customer_type == "new":
        query = query.where(Portal.is_new_customer.is_(True))
    elif customer_type == "existing":
        query = query.where(Portal.is_new_customer.is_(False))

    column = SORTABLE_COLUMNS.get(sort_by, Portal.created_at)
    ascending = sort_order == "asc"
    order = column.asc() if ascending else column.desc()
    if column is Portal.ship_date:
        order = order.nulls_last()
    query = query.order_by(order, Portal.id.asc() if ascending else Portal.id.desc()).limit(limit)

    result = await session.execute(query)
    portals = [
        {
            "id": portal.id,
            "customer_name": portal.customer_name,
            "customer_email": portal.customer_email,
            "customer_phone": portal.customer_phone,
            "trade_show_name": portal.trade_show_name,
            "ship_date": portal.ship_date,
            "created_at": portal.created_at,
            "status": portal.status,
            "unique_link": portal.unique_link,
            "url": f"/portal/{portal.unique_link}",
            "is_new_customer": portal.is_new_customer,
        }
        for portal in result.scalars().all()
    ]

    shows = await session.execute(
        select(Portal.trade_show_name)
        .where(Portal.trade_show_name.is_not(None), Portal.trade_show_name != "")
        .distinct()
        .order_by(Portal.trade_show_name)
    )

    return {
        "portals": portals,
        "count": len(portals),
        "filters": {"tradeShows": list(shows.scalars().all())},
    }


async def list_all_portals(session: AsyncSession) -> list[dict[str, Any]]:
    """Every portal, newest first (admin dashboard)."""
    result = await session.execute(select(Portal).order_by(Portal.created_at.desc(), Portal.id.desc()))
    return [row_to_dict(portal) for portal in result.scalars().all()]


async def _get_by_link(session: AsyncSession, link: str) -> Portal:
    result = await session.execute(select(Portal).where(Portal.unique_link == link))
    portal = result.scalar_one_or_none()
    if portal is None:
        raise PortalNotFoundError("Portal not found")
    return portal


async def get_portal(session: AsyncSession, portal_id: int | None) -> Portal:
    if not portal_id:
        raise PortalValidationError("Portal ID is required")
    portal = await session.get(Portal, portal_id)
    if portal is None:
        raise PortalNotFoundError("Portal not found")
    return portal


async def get_portal_view(session: AsyncSession, link: str) -> dict[str, Any]:
    """Portal with its items, files and the color x size product groups."""
    portal = await _get_by_link(session, link)

    items_result = await session.execute(
        select(PortalItem).where(PortalItem.portal_id == portal.id).order_by(PortalItem.id)
    )
    items = [row_to_dict(item) for item in items_result.scalars().all()]

    files_result = await session.execute(
        select(PortalAttachment).where(PortalAttachment.portal_id == portal.id).order_by(PortalAttachment.id)
    )
    files = [row_to_dict(attachment) for attachment in files_result.scalars().all()]

    groups = build_product_groups(items)
    view = row_to_dict(portal)
    view.update(
        {
            "items": items,
            "files": files,
            "productGroups": [group.to_dict() for group in groups],
            "grandTotal": round(grand_total(groups), 2),
        }
    )
    return view


async def confirm_portal(session: AsyncSession, link: str) -> None:
    """Mark a portal confirmed by the customer."""
    portal = await _get_by_link(session, link)
    portal.status = PortalStatus.CONFIRMED.value
    await session.flush()
    logger.info(f"Portal confirmed: {link}")


async def update_portal_status(session: AsyncSession, portal_id: int | None, status: str | None) -> dict[str, Any]:
    """Change a portal's lifecycle status.

    Raises:
        PortalValidationError: missing id or status outside PortalStatus.
        PortalNotFoundError: no portal with that id.
    """
    if not portal_id:
        raise PortalValidationError("Portal ID is required")
    if status not in VALID_STATUSES:
        raise PortalValidationError(f"Invalid status. Must be one of: {', '.join(VALID_STATUSES)}")

    portal = await get_portal(session, portal_id)
    portal.status = status
    await session.flush()
    await session.refresh(portal)
    return row_to_dict(portal)


async def delete_portal(session: AsyncSession, portal_id: int | None) -> None:
    """Delete a portal with its items and attachments."""
    portal = await get_portal(session, portal_id)
    await session.execute(delete(PortalItem).where(PortalItem.portal_id == portal.id))
    await session.execute(delete(PortalAttachment).where(PortalAttachment.portal_id == portal.id))
    await session.delete(portal)
    await session.flush()
    logger.info(f"Portal deleted: {portal_id}")


async def add_attachment(
    session: AsyncSession,
    portal_id: int | None,
    file_name: str,
    file_url: str,
    content_type: str | None,
    file_size: int,
) -> PortalAttachment:
    """Record an uploaded file against a portal."""
    portal = await get_portal(session, portal_id)
    attachment = PortalAttachment(
        portal_id=portal.id,
        file_name=file_name,
        file_url=file_url,
        file_type="photo" if (content_type or "").startswith("image/") else "document",
        file_size=file_size,
    )
    session.add(attachment)
    await session.flush()
    return attachment

