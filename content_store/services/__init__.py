"""
Service Layer Module Initialization
"""

from content_store.services.credential_service import CredentialService
from content_store.services.formatter import ContentFormatter
from content_store.services.post_service import PostService
from content_store.services.session_service import SessionTokenService

__all__ = [
    "CredentialService",
    "ContentFormatter",
    "PostService",
    "SessionTokenService",
]
