"""
Data Access Layer Module Initialization
"""

from content_store.repositories.event_log_repo import EventLogRepository
from content_store.repositories.kv_store_repo import KVStoreRepository

__all__ = [
    "EventLogRepository",
    "KVStoreRepository",
]
