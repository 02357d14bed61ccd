"""
SQLAlchemy Repository Implementation Module Initialization
"""

from content_store.repositories.sqlalchemy.event_log_repo import SQLAlchemyEventLogRepository
from content_store.repositories.sqlalchemy.kv_store_repo import SQLAlchemyKVStoreRepository

__all__ = [
    "SQLAlchemyEventLogRepository",
    "SQLAlchemyKVStoreRepository",
]
