"""
Event Log Repository SQLAlchemy Implementation

Appends audit events to the ``user_logs`` table.
"""

import logging
from typing import Any, Optional

from sqlalchemy import insert

from content_store.db.models import OWNER_COLUMN, user_logs_table
from content_store.domain.kv_store import encode_value
from content_store.repositories.event_log_repo import EventLogRepository
from content_store.repositories.sqlalchemy.base import SQLAlchemyRepository

logger = logging.getLogger(__name__)


class SQLAlchemyEventLogRepository(SQLAlchemyRepository, EventLogRepository):
    """
    Event Log Repository SQLAlchemy Implementation

    Scoped by ``user_id`` when ``user_logs`` carries that column.
    """

    async def log(self, event: str, details: Optional[dict[str, Any]] = None) -> None:
        """Append an audit event, discarding any failure"""
        try:
            capabilities = await self._capabilities()
            scoped = capabilities.audit_owner_column
            table = user_logs_table(scoped)

            values: dict[str, Any] = {"event": event, "details": encode_value(details or {})}
            if scoped:
                values[OWNER_COLUMN] = self.context.owner_id

            async with self._session("log_event") as session:
                await session.execute(insert(table).values(**values))
                await session.commit()
        except Exception as e:
            logger.warning(f"Audit event {event!r} was not recorded: {e}")
