"""Admin endpoints: sync triggers and portal management.

Each sync runs to completion inside the request. When Redis is configured a
per-type lock rejects an overlapping run of the same sync with 409, and a
full sync and a single-type sync refuse to run at the same time.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError

from tradeshow.routes.deps import get_sync_clients
from tradeshow.schemas.common import ErrorResponse
from tradeshow.schemas.portal import PortalIdRequest, PortalStatusRequest
from tradeshow.services.portals import delete_portal, list_all_portals, update_portal_status
from tradeshow.services.sync_engine import SyncClients, run_sync
from tradeshow.services.sync_jobs import ENTITY_SYNCS, sync_all
from tradeshow.stores.postgres import get_session
from tradeshow.stores.redis import acquire_lock, is_locked, release_lock

router = APIRouter()
logger = logging.getLogger("uvicorn.error")

ALL_LOCK = "all"


async def _try_lock(key: str) -> bool | None:
    """True if acquired, False if another run holds it, None when locking is unavailable."""
    try:
        return await acquire_lock(key)
    except RuntimeError:
        return None
    except RedisError as e:
        logger.warning(f"Sync lock unavailable for {key}, running unguarded: {e}")
        return None


async def _release(key: str) -> None:
    try:
        await release_lock(key)
    except RedisError as e:
        logger.warning(f"Failed to release sync lock {key}: {e}")


async def _held_elsewhere(keys: list[str]) -> str | None:
    """First of `keys` whose lock is held, or None."""
    for key in keys:
        try:
            if await is_locked(key):
                return key
        except RedisError as e:
            logger.warning(f"Could not check sync lock {key}: {e}")
    return None


def _busy(key: str) -> JSONResponse:
    label = "full" if key == ALL_LOCK else key
    return JSONResponse(
        status_code=409,
        content=ErrorResponse(error=f"A {label} sync is already running").model_dump(),
    )


async def _guarded(
    key: str,
    run: Callable[[], Awaitable[JSONResponse]],
    conflicts: list[str],
) -> JSONResponse:
    """Run under `key`'s lock, refusing while it or any of `conflicts` is held."""
    locked = await _try_lock(key)
    if locked is False:
        return _busy(key)
    try:
        if locked:
            other = await _held_elsewhere(conflicts)
            if other:
                return _busy(other)
        return await run()
    finally:
        if locked:
            await _release(key)


def _make_sync_endpoint(sync_type: str):
    async def trigger_sync(clients: SyncClients = Depends(get_sync_clients)) -> JSONResponse:
        async def run() -> JSONResponse:
            async with get_session() as session:
                summary = await run_sync(session, ENTITY_SYNCS[sync_type], clients)
            if not summary.success:
                return JSONResponse(
                    status_code=500,
                    content={"success": False, "error": summary.error, "stats": summary.to_dict()},
                )
            return JSONResponse(content={"success": True, "stats": summary.to_dict()})

        return await _guarded(sync_type, run, conflicts=[ALL_LOCK])

    trigger_sync.__name__ = f"sync_{sync_type}"
    trigger_sync.__doc__ = f"Mirror {sync_type.replace('_', ' ')} into the local database."
    return trigger_sync


for _sync_type in ENTITY_SYNCS:
    router.add_api_route(
        f"/sync-{_sync_type.replace('_', '-')}",
        _make_sync_endpoint(_sync_type),
        methods=["POST"],
    )


@router.post("/sync-all")
async def trigger_sync_all(clients: SyncClients = Depends(get_sync_clients)) -> JSONResponse:
    """Run every sync in dependency order."""

    async def run() -> JSONResponse:
        async with get_session() as session:
            result = await sync_all(session, clients)
        return JSONResponse(content=result)

    return await _guarded(ALL_LOCK, run, conflicts=list(ENTITY_SYNCS))


@router.get("/portals")
async def admin_list_portals() -> dict[str, Any]:
    async with get_session() as session:
        portals = await list_all_portals(session)
    return {"success": True, "portals": portals}


@router.put("/portals/status")
async def admin_update_portal_status(request: PortalStatusRequest) -> dict[str, Any]:
    async with get_session() as session:
        portal = await update_portal_status(session, request.portal_id, request.status)
    return {"success": True, "portal": portal, "message": "Status updated successfully"}


@router.post("/portals/delete")
async def admin_delete_portal(request: PortalIdRequest) -> dict[str, Any]:
    async with get_session() as session:
        await delete_portal(session, request.portal_id)
    return {"success": True, "message": "Portal deleted successfully"}
