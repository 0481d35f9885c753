import pytest

from tenderbid.core.config import Config, to_asyncpg_url


def test_to_asyncpg_url():
    assert to_asyncpg_url("postgres://u:p@db:5432/tenders") == "postgresql+asyncpg://u:p@db:5432/tenders"
    assert to_asyncpg_url("postgresql://u:p@db/tenders") == "postgresql+asyncpg://u:p@db/tenders"
    assert to_asyncpg_url("sqlite+aiosqlite://") == "sqlite+aiosqlite://"


def test_database_url_prefers_explicit_url(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///tenders.db")
    config = Config()
    config.POSTGRES_CONN = "postgres://u:p@db:5432/tenders"

    assert config.DATABASE_URL == "sqlite+aiosqlite:///tenders.db"


def test_database_url_from_conn_string(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    config = Config()
    config.POSTGRES_CONN = "postgres://u:p@db:5432/tenders"

    assert config.DATABASE_URL == "postgresql+asyncpg://u:p@db:5432/tenders"


def test_database_url_from_parts(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    config = Config()
    config.POSTGRES_CONN = None
    config.POSTGRES_USER, config.POSTGRES_PASSWORD, config.POSTGRES_DB = "u", "p", "tenders"
    config.POSTGRES_HOST, config.POSTGRES_PORT = "db", "5432"

    assert config.DATABASE_URL == "postgresql+asyncpg://u:p@db:5432/tenders"
    config.validate()


def test_validate_reports_missing_vars(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    config = Config()
    config.POSTGRES_CONN = None
    config.POSTGRES_USER, config.POSTGRES_PASSWORD, config.POSTGRES_DB = "u", None, None

    with pytest.raises(ValueError) as exc_info:
        config.validate()
    assert "POSTGRES_PASSWORD" in str(exc_info.value)
    assert "POSTGRES_DB" in str(exc_info.value)
