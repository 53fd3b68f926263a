"""Shared route dependencies."""

from fastapi import Request

from tradeshow.services.sync_engine import SyncClients


def get_sync_clients(request: Request) -> SyncClients:
    """Remote API clients built in the app lifespan."""
    clients = getattr(request.app.state, "sync_clients", None)
    if clients is None:
        raise RuntimeError("Sync clients not initialized")
    return clients
