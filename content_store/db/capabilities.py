"""
Schema Capability Negotiation

Existing deployments differ in whether ``app_data`` / ``user_logs`` carry a
``user_id`` column. The shape is read once from the database catalog and kept
as an immutable ``StoreCapabilities`` value for the lifetime of the context.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import inspect
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncEngine

from content_store.db.models import APP_DATA_TABLE, OWNER_COLUMN, USER_LOGS_TABLE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreCapabilities:
    """Optional schema features exposed by the backing tables"""

    kv_owner_column: bool = False
    audit_owner_column: bool = False


# Used whenever the probe cannot tell: never reference a column that may not exist
UNSCOPED = StoreCapabilities()


def _read_owner_columns(sync_conn: Connection) -> StoreCapabilities:
    inspector = inspect(sync_conn)
    tables = set(inspector.get_table_names())

    def has_owner(table: str) -> bool:
        if table not in tables:
            return False
        return any(c["name"] == OWNER_COLUMN for c in inspector.get_columns(table))

    return StoreCapabilities(
        kv_owner_column=has_owner(APP_DATA_TABLE),
        audit_owner_column=has_owner(USER_LOGS_TABLE),
    )


async def probe_capabilities(engine: AsyncEngine) -> StoreCapabilities:
    """
    Detect which optional columns are present.

    Never raises: any failure, including an unreachable database, yields
    ``UNSCOPED``.
    """
    try:
        async with engine.connect() as conn:
            capabilities = await conn.run_sync(_read_owner_columns)
    except Exception as e:
        logger.warning(f"Schema capability probe failed, assuming unscoped tables: {e}")
        return UNSCOPED

    logger.info(
        "Schema capabilities: app_data.user_id=%s user_logs.user_id=%s",
        capabilities.kv_owner_column,
        capabilities.audit_owner_column,
    )
    return capabilities


class CapabilityCache:
    """
    Compute-once holder for ``StoreCapabilities``

    Concurrent first callers wait on one probe; once a value is set it is
    never recomputed.
    """

    def __init__(self, engine: AsyncEngine):
        self._engine = engine
        self._value: Optional[StoreCapabilities] = None
        self._lock = asyncio.Lock()

    @property
    def value(self) -> Optional[StoreCapabilities]:
        return self._value

    async def get(self) -> StoreCapabilities:
        if self._value is not None:
            return self._value
        async with self._lock:
            if self._value is None:
                self._value = await probe_capabilities(self._engine)
        return self._value

    def set(self, capabilities: StoreCapabilities) -> None:
        """Pin capabilities explicitly (startup negotiation, tests)."""
        if self._value is None:
            self._value = capabilities
