"""
PostgresStore adapter for the DevConnect document model.

Implements the DocumentStore protocol using a single Postgres table:

  documents(collection TEXT, id TEXT, body JSONB, PRIMARY KEY (collection, id))

Unique constraints are partial expression indexes on `body` (see the
initial alembic migration). Index names follow
`documents_<collection>_<field>_key` so a violation maps back to a field.
"""

from __future__ import annotations

from typing import Any

import asyncpg

from engine.kernel.storage import DocumentStore, DuplicateKeyError


class PostgresStore(DocumentStore):
    """
    Postgres-based storage for aggregate documents.

    The pool must have JSONB codecs installed (see backend.db), so `body`
    round-trips as a Python dict.
    """

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    async def find(
        self,
        collection: str,
        filter: dict[str, Any] | None = None,
        *,
        sort_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        direction = "DESC" if descending else "ASC"
        order = f"ORDER BY body ->> $3 {direction}" if sort_by else "ORDER BY created_at"
        args: list[Any] = [collection, filter or {}]
        if sort_by:
            args.append(sort_by)

        async with self.pool.acquire() as conn:
            rows = await conn.fetch(
                f"""
                SELECT body FROM documents
                WHERE collection = $1 AND body @> $2
                {order}
                """,  # nosec B608
                *args,
            )
            return [row["body"] for row in rows]

    async def find_one(self, collection: str, filter: dict[str, Any]) -> dict[str, Any] | None:
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT body FROM documents WHERE collection = $1 AND body @> $2 LIMIT 1",
                collection,
                filter,
            )
            return row["body"] if row else None

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT body FROM documents WHERE collection = $1 AND id = $2",
                collection,
                str(doc_id),
            )
            return row["body"] if row else None

    async def insert(self, collection: str, document: dict[str, Any]) -> dict[str, Any]:
        async with self.pool.acquire() as conn:
            try:
                row = await conn.fetchrow(
                    """
                    INSERT INTO documents (collection, id, body)
                    VALUES ($1, $2, $3)
                    RETURNING body
                    """,
                    collection,
                    str(document["_id"]),
                    document,
                )
            except asyncpg.UniqueViolationError as e:
                raise _duplicate(collection, e) from e
            return row["body"]

    async def replace(self, collection: str, doc_id: str, document: dict[str, Any]) -> dict[str, Any] | None:
        body = {**document, "_id": str(doc_id)}
        async with self.pool.acquire() as conn:
            try:
                row = await conn.fetchrow(
                    """
                    UPDATE documents
                    SET body = $3, updated_at = now()
                    WHERE collection = $1 AND id = $2
                    RETURNING body
                    """,
                    collection,
                    str(doc_id),
                    body,
                )
            except asyncpg.UniqueViolationError as e:
                raise _duplicate(collection, e) from e
            return row["body"] if row else None

    async def delete(self, collection: str, doc_id: str) -> bool:
        async with self.pool.acquire() as conn:
            result = await conn.execute(
                "DELETE FROM documents WHERE collection = $1 AND id = $2",
                collection,
                str(doc_id),
            )
            return result == "DELETE 1"

    async def delete_where(self, collection: str, filter: dict[str, Any]) -> int:
        async with self.pool.acquire() as conn:
            result = await conn.execute(
                "DELETE FROM documents WHERE collection = $1 AND body @> $2",
                collection,
                filter,
            )
            # result is a string like "DELETE 3"
            return int(result.split()[-1])

    async def close(self) -> None:
        """Close the connection pool."""
        await self.pool.close()


def _duplicate(collection: str, error: asyncpg.UniqueViolationError) -> DuplicateKeyError:
    constraint = getattr(error, "constraint_name", None) or ""
    prefix = f"documents_{collection}_"
    if constraint.startswith(prefix) and constraint.endswith("_key"):
        return DuplicateKeyError(collection, constraint[len(prefix) : -len("_key")])
    return DuplicateKeyError(collection, "_id")
