import pytest

from tradeshow.settings import Settings


def test_database_url_gets_asyncpg_driver(monkeypatch: pytest.MonkeyPatch):
    """Postgres URLs get the asyncpg driver."""
    monkeypatch.setenv("DATABASE_URL", "postgres://u:p@db.example.com:5432/shows")
    settings = Settings()

    assert settings.async_database_url == "postgresql+asyncpg://u:p@db.example.com:5432/shows"
    assert settings.asyncpg_connect_args == {}


def test_sslmode_moves_into_connect_args(monkeypatch: pytest.MonkeyPatch):
    """sslmode moves from the URL into connect args."""
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db.example.com/shows?sslmode=require&application_name=portal")
    settings = Settings()

    assert settings.async_database_url == "postgresql+asyncpg://u:p@db.example.com/shows?application_name=portal"
    assert settings.asyncpg_connect_args == {"ssl": "require"}


def test_private_railway_host_disables_ssl(monkeypatch: pytest.MonkeyPatch):
    """Private Railway hosts connect without SSL."""
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@postgres.railway.internal:5432/railway")

    assert Settings().asyncpg_connect_args == {"ssl": False, "timeout": 20}


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("https://a.test, https://b.test", ["https://a.test", "https://b.test"]),
        ('["https://a.test","https://b.test"]', ["https://a.test", "https://b.test"]),
        ("", []),
    ],
)
def test_cors_origins_formats(monkeypatch: pytest.MonkeyPatch, raw, expected):
    """CORS origins parse from comma lists and JSON."""
    monkeypatch.setenv("CORS_ORIGINS", raw)

    assert Settings().cors_origins == expected
