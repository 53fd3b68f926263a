"""Portal endpoints (admin wizard + public portal page)."""

import logging
from typing import Any

from fastapi import APIRouter, File, Form, Query, UploadFile

from tradeshow.schemas.portal import (
    PortalCreateRequest,
    PortalCreateResponse,
    PortalIdRequest,
    PortalStatusRequest,
    PortalSummary,
)
from tradeshow.services.attachments import remove_attachment, save_attachment
from tradeshow.services.portals import (
    add_attachment,
    confirm_portal,
    create_portal,
    delete_portal,
    get_portal,
    get_portal_view,
    list_portals,
    update_portal_status,
)
from tradeshow.stores.postgres import get_session

router = APIRouter()
logger = logging.getLogger("uvicorn.error")


@router.post("/create", response_model=PortalCreateResponse)
async def create(request: PortalCreateRequest) -> PortalCreateResponse:
    """Create a portal with a fresh 12-character link."""
    async with get_session() as session:
        portal = await create_portal(session, request)
        summary = PortalSummary(
            id=portal.id,
            unique_link=portal.unique_link,
            customer_name=portal.customer_name,
            status=portal.status,
        )
    return PortalCreateResponse(portal=summary)


@router.get("/list")
async def list_(
    status: str | None = None,
    trade_show: str | None = Query(default=None, alias="tradeShow"),
    customer_type: str | None = Query(default=None, alias="customerType"),
    sort_by: str = Query(default="created_at", alias="sortBy"),
    sort_order: str = Query(default="desc", alias="sortOrder"),
    limit: int = Query(default=100, ge=1, le=1000),
) -> dict[str, Any]:
    async with get_session() as session:
        result = await list_portals(
            session,
            status=status,
            trade_show=trade_show,
            customer_type=customer_type,
            sort_by=sort_by,
            sort_order=sort_order,
            limit=limit,
        )
    return {"success": True, **result}


@router.post("/update-status")
async def update_status(request: PortalStatusRequest) -> dict[str, bool]:
    async with get_session() as session:
        await update_portal_status(session, request.portal_id, request.status)
    return {"success": True}


@router.delete("/delete")
async def delete(request: PortalIdRequest) -> dict[str, bool]:
    async with get_session() as session:
        await delete_portal(session, request.portal_id)
    return {"success": True}


@router.post("/upload")
async def upload(
    file: UploadFile = File(...),
    portal_id: int = Form(..., alias="portalId"),
) -> dict[str, Any]:
    """Attach a photo or document to a portal."""
    async with get_session() as session:
        portal = await get_portal(session, portal_id)
        data = await file.read()
        stored = save_attachment(portal.id, file.filename or "upload", data)
        try:
            await add_attachment(
                session,
                portal.id,
                file_name=file.filename or stored.relative_path,
                file_url=stored.public_url,
                content_type=file.content_type,
                file_size=stored.size,
            )
            await session.commit()
        except Exception:
            remove_attachment(stored.relative_path)
            raise
    return {"success": True, "url": stored.public_url}


@router.get("/{link}")
async def view(link: str) -> dict[str, Any]:
    """Portal with items, files and the size x color product groups."""
    async with get_session() as session:
        portal = await get_portal_view(session, link)
    return {"success": True, "portal": portal}


@router.post("/{link}/confirm")
async def confirm(link: str) -> dict[str, bool]:
    async with get_session() as session:
        await confirm_portal(session, link)
    return {"success": True}
