"""
Key-Value Store Repository SQLAlchemy Implementation

Provides concrete database operation implementation for KV Store on the
``app_data`` table, adapting every statement to the negotiated schema shape.
"""

import logging
from typing import Any, Optional

from pydantic import JsonValue
from sqlalchemy import Table, delete, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from content_store.db.models import OWNER_COLUMN, app_data_table
from content_store.domain.kv_store import decode_value, encode_value
from content_store.repositories.kv_store_repo import KVStoreRepository
from content_store.repositories.sqlalchemy.base import SQLAlchemyRepository

logger = logging.getLogger(__name__)


class SQLAlchemyKVStoreRepository(SQLAlchemyRepository, KVStoreRepository):
    """
    Key-Value Store Repository SQLAlchemy Implementation

    When ``app_data`` has a ``user_id`` column every statement is scoped to
    the context's owner id and conflicts are resolved on ``(key, user_id)``;
    otherwise statements run unscoped and conflict on ``key``.
    """

    def _insert(self, table: Table):
        if self.context.engine.dialect.name == "postgresql":
            return pg_insert(table)
        return sqlite_insert(table)

    async def _table(self) -> tuple[Table, bool]:
        capabilities = await self._capabilities()
        scoped = capabilities.kv_owner_column
        return app_data_table(scoped), scoped

    def _scope(self, stmt, table: Table, scoped: bool):
        if scoped:
            stmt = stmt.where(table.c[OWNER_COLUMN] == self.context.owner_id)
        return stmt

    def _row_values(self, key: str, payload: JsonValue, scoped: bool) -> tuple[dict[str, Any], list[str]]:
        values: dict[str, Any] = {"key": key, "value": payload}
        index_elements = ["key"]
        if scoped:
            values[OWNER_COLUMN] = self.context.owner_id
            index_elements.append(OWNER_COLUMN)
        return values, index_elements

    async def get(self, key: str) -> Optional[JsonValue]:
        """Get value by key, returns None if not found"""
        table, scoped = await self._table()
        stmt = self._scope(select(table.c.value).where(table.c.key == key), table, scoped)

        async with self._session("get") as session:
            result = await session.execute(stmt)
            row = result.first()

        if row is None:
            return None
        return decode_value(row.value)

    async def put(self, key: str, value: Any) -> None:
        """Upsert a key-value pair, refreshing updated_at"""
        payload = encode_value(value)
        table, scoped = await self._table()
        values, index_elements = self._row_values(key, payload, scoped)

        insert = self._insert(table).values(**values)
        stmt = insert.on_conflict_do_update(
            index_elements=index_elements,
            set_={"value": insert.excluded.value, "updated_at": func.now()},
        )

        async with self._session("put") as session:
            await session.execute(stmt)
            await session.commit()

    async def put_if_absent(self, key: str, value: Any) -> JsonValue:
        """Insert unless the key exists, then return whichever value is stored"""
        payload = encode_value(value)
        table, scoped = await self._table()
        values, index_elements = self._row_values(key, payload, scoped)

        stmt = self._insert(table).values(**values).on_conflict_do_nothing(
            index_elements=index_elements
        )
        read_back = self._scope(select(table.c.value).where(table.c.key == key), table, scoped)

        async with self._session("put_if_absent") as session:
            await session.execute(stmt)
            row = (await session.execute(read_back)).first()
            await session.commit()

        if row is None:
            # deleted between the two statements; what we tried to write is the best answer
            logger.warning(f"Key {key!r} vanished during put_if_absent")
            return payload
        return decode_value(row.value)

    async def delete(self, key: str) -> bool:
        """Delete a key"""
        table, scoped = await self._table()
        stmt = self._scope(delete(table).where(table.c.key == key), table, scoped)

        async with self._session("delete") as session:
            result = await session.execute(stmt)
            await session.commit()

        return result.rowcount > 0

    async def list_keys_with_prefix(self, prefix: str) -> list[str]:
        """List keys starting with prefix, newest-sorting first"""
        table, scoped = await self._table()
        stmt = self._scope(
            select(table.c.key).where(table.c.key.startswith(prefix, autoescape=True)),
            table,
            scoped,
        ).order_by(table.c.key.desc())

        async with self._session("list_keys_with_prefix") as session:
            result = await session.execute(stmt)
            keys = list(result.scalars().all())

        # SQLite LIKE is case-insensitive for ASCII
        return [k for k in keys if k.startswith(prefix)]
