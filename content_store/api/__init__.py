"""
API Router Module Initialization
"""

from content_store.api.deps import get_store_context, require_admin_auth

__all__ = [
    "get_store_context",
    "require_admin_auth",
]
