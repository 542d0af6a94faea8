"""Database pool management for kintree."""

from __future__ import annotations

import os

import asyncpg

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

_DB_HOST = os.environ.get("KT_DB_HOST", "localhost")
_DB_PORT = os.environ.get("KT_DB_PORT", "5432")
_DB_USER = os.environ.get("KT_DB_USER", "postgres")
_DB_PASSWORD = os.environ.get("KT_DB_PASSWORD", "postgres")
_DB_NAME = os.environ.get("KT_DB_NAME", "kintree")

DATABASE_URL = os.environ.get(
    "KT_DATABASE_URL",
    f"postgresql://{_DB_USER}:{_DB_PASSWORD}@{_DB_HOST}:{_DB_PORT}/{_DB_NAME}",
)

POOL_MIN_SIZE = int(os.environ.get("KT_DB_POOL_MIN", "2"))
POOL_MAX_SIZE = int(os.environ.get("KT_DB_POOL_MAX", "10"))

# ---------------------------------------------------------------------------
# Pool
# ---------------------------------------------------------------------------

_pool: asyncpg.Pool | None = None


async def init_pool() -> asyncpg.Pool:
    """Create the global asyncpg connection pool."""
    global _pool
    _pool = await asyncpg.create_pool(
        DATABASE_URL,
        min_size=POOL_MIN_SIZE,
        max_size=POOL_MAX_SIZE,
    )
    return _pool


async def close_pool() -> None:
    """Gracefully close the connection pool."""
    global _pool
    if _pool:
        await _pool.close()
        _pool = None


def get_pool() -> asyncpg.Pool:
    """Return the pool, raising if not initialized."""
    if _pool is None:
        raise RuntimeError("Database pool not initialized")
    return _pool
