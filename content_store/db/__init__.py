"""
Database Module Initialization
"""

from content_store.db.capabilities import StoreCapabilities, UNSCOPED, probe_capabilities
from content_store.db.context import StoreContext
from content_store.db.session import create_engine, create_session_factory, init_db

__all__ = [
    "StoreCapabilities",
    "UNSCOPED",
    "probe_capabilities",
    "StoreContext",
    "create_engine",
    "create_session_factory",
    "init_db",
]
