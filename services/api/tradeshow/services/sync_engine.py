"""Generic bulk sync: remote collection -> local table.

One routine mirrors every entity type. Each type is described by an
EntitySync (how to fetch, how to map, which column holds the external id,
what child rows to replace) and run through run_sync().

Flow:
1. Insert a sync_log row (status=started) and commit it
2. Fetch every page from the remote source
3. Build external id -> local id maps (customers, orders) once
4. Per record: map, upsert by external id, replace children, commit
5. Finalize sync_log as completed (or failed if steps 2-3 raised)

Each record is its own transaction. A failing record is rolled back (parent
and children together), counted and logged; the run continues.
"""

from collections.abc import Awaitable, Callable
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
import json
import logging
import time
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tradeshow.models import Customer, Order, SyncLog, SyncStatus
from tradeshow.services.apparelmagic_client import ApparelMagicClient
from tradeshow.services.field_mapper import LookupMaps
from tradeshow.services.shipstation_client import ShipStationClient
from tradeshow.stores.postgres import Base

logger = logging.getLogger("uvicorn.error")

PROGRESS_EVERY = 100


@dataclass
class SyncClients:
    """Remote API clients available to fetch functions and child hooks."""

    apparelmagic: ApparelMagicClient | None = None
    shipstation: ShipStationClient | None = None


@dataclass
class SyncContext:
    """Per-run state shared with child hooks."""

    clients: SyncClients
    lookups: LookupMaps
    extra: dict[str, int] = field(default_factory=dict)

    def count(self, name: str, amount: int = 1) -> None:
        self.extra[name] = self.extra.get(name, 0) + amount


FetchFn = Callable[[SyncClients], Awaitable[list[dict[str, Any]]]]
MapFn = Callable[[dict[str, Any], LookupMaps], dict[str, Any]]
PrepareFn = Callable[[SyncContext, dict[str, Any]], Awaitable[Any]]
ChildrenFn = Callable[[AsyncSession, SyncContext, int, dict[str, Any], dict[str, Any], Any], Awaitable[None]]


@dataclass
class EntitySync:
    """Describes how one entity type is mirrored.

    Attributes:
        sync_type: Name used in sync_log and lock keys ("customers", ...).
        source: "apparel_magic" or "shipstation".
        model: Target ORM model.
        key: Column on `model` holding the external id.
        fetch: Fetches the full remote collection.
        mapper: Maps one raw record to column values.
        needs_lookups: Build customer/order lookup maps before the loop.
        prepare: Optional remote fetch per record, run outside the transaction.
        children: Optional child replacement, run inside the record's transaction.
        create_missing: Insert records without a local row (False = update only).
    """

    sync_type: str
    source: str
    model: type[Base]
    key: str
    fetch: FetchFn
    mapper: MapFn
    needs_lookups: bool = False
    prepare: PrepareFn | None = None
    children: ChildrenFn | None = None
    create_missing: bool = True


@dataclass
class SyncSummary:
    """Result of one sync run."""

    sync_type: str
    success: bool = True
    total: int = 0
    created: int = 0
    updated: int = 0
    errors: int = 0
    duration_seconds: float = 0.0
    error: str | None = None
    extra: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


async def build_lookup_maps(session: AsyncSession) -> LookupMaps:
    """Read customer and order id mappings once for FK resolution."""
    lookups = LookupMaps()

    result = await session.execute(
        select(Customer.am_customer_id, Customer.id).where(Customer.am_customer_id.is_not(None))
    )
    for am_customer_id, pk in result.all():
        lookups.customers[am_customer_id] = pk

    result = await session.execute(select(Order.apparel_magic_id, Order.order_number, Order.id))
    for apparel_magic_id, order_number, pk in result.all():
        lookups.orders[apparel_magic_id] = pk
        if order_number:
            lookups.order_numbers[order_number] = pk

    return lookups


async def _load_key_map(session: AsyncSession, entity: EntitySync) -> dict[str, int]:
    key_column = getattr(entity.model, entity.key)
    result = await session.execute(select(key_column, entity.model.id).where(key_column.is_not(None)))
    return {key: pk for key, pk in result.all()}


async def _finish_log(session: AsyncSession, log_id: int, summary: SyncSummary, status: SyncStatus) -> None:
    values: dict[str, Any] = {
        "status": status.value,
        "records_processed": summary.total,
        "records_created": summary.created,
        "records_updated": summary.updated,
        "errors": summary.errors,
        "completed_at": datetime.now(timezone.utc),
        "duration_seconds": round(summary.duration_seconds),
    }
    if summary.error:
        values["error_details_json"] = json.dumps({"message": summary.error})
    await session.execute(update(SyncLog).where(SyncLog.id == log_id).values(**values))
    await session.commit()


async def run_sync(session: AsyncSession, entity: EntitySync, clients: SyncClients) -> SyncSummary:
    """Mirror one remote collection into its local table.

    Args:
        session: Database session (committed per record).
        entity: Entity descriptor.
        clients: Remote API clients.

    Returns:
        SyncSummary. success=False only when fetching or lookup building failed.
    """
    started = time.monotonic()
    summary = SyncSummary(sync_type=entity.sync_type)

    sync_log = SyncLog(sync_type=entity.sync_type, source=entity.source, status=SyncStatus.STARTED.value)
    session.add(sync_log)
    await session.commit()
    log_id = sync_log.id

    logger.info(f"Starting {entity.sync_type} sync from {entity.source} (sync_log={log_id})")

    try:
        records = await entity.fetch(clients)
        lookups = await build_lookup_maps(session) if entity.needs_lookups else LookupMaps()
        existing = await _load_key_map(session, entity)
    except Exception as e:
        await session.rollback()
        logger.exception(f"{entity.sync_type} sync failed before processing records")
        summary.success = False
        summary.error = str(e) or type(e).__name__
        summary.duration_seconds = round(time.monotonic() - started, 2)
        await _finish_log(session, log_id, summary, SyncStatus.FAILED)
        return summary

    summary.total = len(records)
    logger.info(f"Processing {summary.total} {entity.sync_type} records ({len(existing)} already stored)")

    context = SyncContext(clients=clients, lookups=lookups, extra=summary.extra)
    has_synced_at = hasattr(entity.model, "last_synced_at")

    for index, record in enumerate(records, start=1):
        created = False
        try:
            values = entity.mapper(record, lookups)
            external_id = values.get(entity.key)
            if not external_id:
                raise ValueError(f"{entity.sync_type} record has no {entity.key}")
            if has_synced_at:
                values["last_synced_at"] = datetime.now(timezone.utc)

            pk = existing.get(external_id)
            if pk is None and not entity.create_missing:
                context.count("not_found")
                continue

            prepared = await entity.prepare(context, record) if entity.prepare else None

            if pk is not None:
                await session.execute(update(entity.model).where(entity.model.id == pk).values(**values))
            else:
                row = entity.model(**values)
                session.add(row)
                await session.flush()
                pk = row.id
                created = True

            if entity.children:
                await entity.children(session, context, pk, record, values, prepared)

            await session.commit()
        except Exception:
            await session.rollback()
            summary.errors += 1
            logger.exception(f"Error syncing {entity.sync_type} record #{index}")
            continue

        if created:
            existing[external_id] = pk
            summary.created += 1
        else:
            summary.updated += 1

        if index % PROGRESS_EVERY == 0:
            logger.info(f"  Progress: {index}/{summary.total} {entity.sync_type}")

    summary.duration_seconds = round(time.monotonic() - started, 2)
    await _finish_log(session, log_id, summary, SyncStatus.COMPLETED)

    logger.info(
        f"{entity.sync_type} sync complete: total={summary.total}, created={summary.created}, "
        f"updated={summary.updated}, errors={summary.errors}, extra={summary.extra}, "
        f"duration={summary.duration_seconds}s"
    )
    return summary
