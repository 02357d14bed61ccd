"""
Domain Model Module
"""

from content_store.domain.auth import CredentialRecord, SessionClaims, SessionSecretRecord
from content_store.domain.kv_store import decode_value, encode_value
from content_store.domain.post import PostCreate, PostModel, PostSummary

__all__ = [
    "CredentialRecord",
    "SessionClaims",
    "SessionSecretRecord",
    "decode_value",
    "encode_value",
    "PostCreate",
    "PostModel",
    "PostSummary",
]
