"""
Admin API Module Initialization
"""

from content_store.api.admin.posts import router as posts_router

__all__ = [
    "posts_router",
]
