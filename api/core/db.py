"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. `core.startup` creates it and probes it
before the app serves requests; FastAPI closes it on shutdown (see
`api/main.py`).

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
- every query goes through a `Statement`, so values always travel as bound
  arguments and never as part of the SQL text.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from . import settings
from .errors import StorageError

logger = logging.getLogger(__name__)

_pool: asyncpg.Pool | None = None

# Failures that mean "the storage collaborator could not answer".
_STORAGE_FAILURES = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


@dataclass(frozen=True)
class Statement:
    """
    SQL text plus its positional arguments ($1 -> args[0], ...).
    """

    text: str
    args: tuple[Any, ...] = ()

    def compact(self) -> str:
        # Single-line form for logs.
        return " ".join(self.text.split())


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    return _sanitize_database_url(settings.database_url())


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return None
    _pool = await asyncpg.create_pool(
        dsn=database_url(),
        min_size=settings.db_pool_min_size(),
        max_size=settings.db_pool_max_size(),
        command_timeout=settings.db_command_timeout_s(),
    )
    logger.info(
        "db_pool_created min_size=%s max_size=%s",
        settings.db_pool_min_size(),
        settings.db_pool_max_size(),
    )


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def probe() -> None:
    """
    Liveness check: one trivial round trip through the pool.
    """
    try:
        await pool().fetchval("SELECT 1")
    except _STORAGE_FAILURES as exc:
        raise StorageError("Database liveness probe failed.") from exc


async def fetch_one(statement: Statement) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    try:
        row = await pool().fetchrow(statement.text, *statement.args)
    except _STORAGE_FAILURES as exc:
        raise StorageError() from exc
    return _record_to_dict(row) if row is not None else None


async def fetch_all(statement: Statement) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    try:
        rows = await pool().fetch(statement.text, *statement.args)
    except _STORAGE_FAILURES as exc:
        raise StorageError() from exc
    return [_record_to_dict(r) for r in rows]


async def insert(statement: Statement) -> int:
    """
    Run an INSERT ... RETURNING id and return the generated id.
    """
    row = await fetch_one(statement)
    if row is None or row.get("id") is None:
        raise StorageError("Insert returned no id.")
    return int(row["id"])
