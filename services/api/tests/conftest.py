"""Shared fixtures: SQLite database, fake remote APIs, ASGI client."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from tradeshow.main import app
from tradeshow.routes.deps import get_sync_clients
from tradeshow.services.sync_engine import SyncClients
from tradeshow.settings import get_settings
from tradeshow.stores import postgres

from fakes import FakeApparelMagic, FakeShipStation


@pytest_asyncio.fixture
async def db(tmp_path):
    """Fresh SQLite database with all tables."""
    await postgres.init_db(f"sqlite+aiosqlite:///{tmp_path / 'tradeshow.db'}")
    await postgres.create_tables()
    yield
    await postgres.close_db()


@pytest_asyncio.fixture
async def session(db):
    async with postgres.get_session() as s:
        yield s


@pytest.fixture
def erp() -> FakeApparelMagic:
    return FakeApparelMagic()


@pytest.fixture
def shipstation() -> FakeShipStation:
    return FakeShipStation()


@pytest.fixture
def sync_clients(erp: FakeApparelMagic, shipstation: FakeShipStation) -> SyncClients:
    return SyncClients(apparelmagic=erp.client(), shipstation=shipstation.client())


@pytest.fixture
def upload_dir(tmp_path, monkeypatch: pytest.MonkeyPatch):
    target = tmp_path / "uploads"
    monkeypatch.setattr(get_settings(), "upload_dir", str(target))
    return target


@pytest_asyncio.fixture
async def client(db, sync_clients: SyncClients):
    """ASGI client with the database initialized and fake remote APIs wired in."""
    app.dependency_overrides[get_sync_clients] = lambda: sync_clients
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
