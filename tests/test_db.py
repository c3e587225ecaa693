"""
Tests for core.db: statements, storage error translation, settings wiring.
"""

import asyncio

import asyncpg
import pytest

from core import db, settings
from core.errors import StorageError


class FailingPool:
    def __init__(self, exc):
        self.exc = exc

    async def fetch(self, *args):
        raise self.exc

    async def fetchrow(self, *args):
        raise self.exc

    async def fetchval(self, *args):
        raise self.exc


class RowPool:
    def __init__(self, row):
        self.row = row
        self.seen = []

    async def fetchrow(self, sql, *args):
        self.seen.append((sql, args))
        return self.row


class TestStatement:
    def test_compact_collapses_whitespace(self):
        statement = db.Statement("\n  SELECT 1\n   FROM poem\n WHERE id = $1\n", (3,))
        assert statement.compact() == "SELECT 1 FROM poem WHERE id = $1"

    def test_is_immutable(self):
        statement = db.Statement("SELECT 1")
        with pytest.raises(AttributeError):
            statement.text = "DROP TABLE poem"  # type: ignore[misc]


class TestStorageErrors:
    @pytest.mark.parametrize(
        "exc",
        [
            ConnectionRefusedError("refused"),
            asyncio.TimeoutError(),
            asyncpg.InterfaceError("pool is closed"),
        ],
    )
    def test_driver_failures_become_storage_errors(self, monkeypatch, exc):
        monkeypatch.setattr(db, "_pool", FailingPool(exc))

        with pytest.raises(StorageError) as info:
            asyncio.run(db.fetch_all(db.Statement("SELECT 1")))
        assert info.value.__cause__ is exc

        with pytest.raises(StorageError):
            asyncio.run(db.fetch_one(db.Statement("SELECT 1")))

        with pytest.raises(StorageError):
            asyncio.run(db.probe())

    def test_insert_returns_generated_id(self, monkeypatch):
        pool = RowPool({"id": 12})
        monkeypatch.setattr(db, "_pool", pool)

        inserted = asyncio.run(db.insert(db.Statement("INSERT ... RETURNING id", ("a",))))

        assert inserted == 12
        assert pool.seen == [("INSERT ... RETURNING id", ("a",))]

    def test_insert_without_id_is_storage_error(self, monkeypatch):
        monkeypatch.setattr(db, "_pool", RowPool(None))

        with pytest.raises(StorageError):
            asyncio.run(db.insert(db.Statement("INSERT ... RETURNING id")))

    def test_uninitialized_pool(self, monkeypatch):
        monkeypatch.setattr(db, "_pool", None)
        with pytest.raises(RuntimeError):
            db.pool()


class TestSettings:
    def test_sslmode_is_stripped(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@h:5432/poetry?sslmode=disable&application_name=api")
        assert db.database_url() == "postgresql://u:p@h:5432/poetry?application_name=api"

    def test_missing_database_url(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL")
        with pytest.raises(RuntimeError):
            settings.database_url()

    def test_pool_size_defaults_and_fallbacks(self, monkeypatch):
        assert settings.db_pool_max_size() == 10
        monkeypatch.setenv("DB_POOL_MAX_SIZE", "not-a-number")
        assert settings.db_pool_max_size() == 10
        monkeypatch.setenv("DB_POOL_MAX_SIZE", "4")
        assert settings.db_pool_max_size() == 4

    def test_cors_origins(self, monkeypatch):
        assert settings.cors_origins() == ["*"]
        monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
        assert settings.cors_origins() == ["http://a.test", "http://b.test"]
