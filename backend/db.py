"""
Document store lifecycle.

All persistence goes through the store returned by get_store().
Never construct a store or touch the asyncpg pool outside this module.
"""

from __future__ import annotations

import json
import logging

import asyncpg

from backend import config
from engine.kernel.postgres_storage import PostgresStore
from engine.kernel.storage import DocumentStore, MemoryStore

logger = logging.getLogger(__name__)

store: DocumentStore | None = None


async def init_store() -> DocumentStore:
    """
    Initialize the configured document store.
    Called once at application startup.
    """
    global store
    if config.settings.STORE_BACKEND == "memory":
        store = MemoryStore()
    else:
        pool = await asyncpg.create_pool(
            dsn=config.settings.DATABASE_URL,
            min_size=config.settings.DB_POOL_MIN_SIZE,
            max_size=config.settings.DB_POOL_MAX_SIZE,
            command_timeout=60,
            init=_init_connection,
        )
        store = PostgresStore(pool)
    logger.info("Document store initialized (%s)", config.settings.STORE_BACKEND)
    return store


async def close_store() -> None:
    """
    Close the document store.
    Called at application shutdown.
    """
    global store
    if store is not None:
        await store.close()
        store = None


def get_store() -> DocumentStore:
    if store is None:
        raise RuntimeError("Document store not initialized. Call init_store() first.")
    return store


async def _init_connection(conn: asyncpg.Connection) -> None:
    """
    Initialize each new connection.
    Sets up type codecs so JSONB round-trips as Python dicts.
    """
    await conn.set_type_codec(
        "jsonb",
        encoder=json.dumps,
        decoder=json.loads,
        schema="pg_catalog",
    )
    await conn.set_type_codec(
        "json",
        encoder=json.dumps,
        decoder=json.loads,
        schema="pg_catalog",
    )
