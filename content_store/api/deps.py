"""
API Dependency Injection Module

Provides the dependencies required by FastAPI routes.
"""

from typing import Annotated

from fastapi import Depends, Header, Request

from content_store.common.errors import AuthenticationError
from content_store.common.sites import site_from_host
from content_store.config import get_settings
from content_store.db.context import StoreContext
from content_store.domain.auth import SessionClaims
from content_store.repositories.sqlalchemy import (
    SQLAlchemyEventLogRepository,
    SQLAlchemyKVStoreRepository,
)
from content_store.services import (
    ContentFormatter,
    CredentialService,
    PostService,
    SessionTokenService,
)


def get_store_context(request: Request) -> StoreContext:
    """Store context created in the application lifespan"""
    return request.app.state.store_context


StoreContextDep = Annotated[StoreContext, Depends(get_store_context)]


# ============ Repository Dependencies ============

def get_kv_repo(context: StoreContextDep) -> SQLAlchemyKVStoreRepository:
    """Get KV Store Repository"""
    return SQLAlchemyKVStoreRepository(context)


def get_event_log(context: StoreContextDep) -> SQLAlchemyEventLogRepository:
    """Get Event Log Repository"""
    return SQLAlchemyEventLogRepository(context)


KVRepoDep = Annotated[SQLAlchemyKVStoreRepository, Depends(get_kv_repo)]
EventLogDep = Annotated[SQLAlchemyEventLogRepository, Depends(get_event_log)]


# ============ Service Dependencies ============

def get_credential_service(kv: KVRepoDep, event_log: EventLogDep) -> CredentialService:
    """Get Credential Service"""
    return CredentialService(kv, event_log, iterations=get_settings().PASSWORD_HASH_ITERATIONS)


def get_session_service(kv: KVRepoDep) -> SessionTokenService:
    """Get Session Token Service"""
    return SessionTokenService(kv)


def get_formatter() -> ContentFormatter:
    """Get Content Formatter"""
    return ContentFormatter()


def get_post_service(
    kv: KVRepoDep,
    event_log: EventLogDep,
    formatter: Annotated[ContentFormatter, Depends(get_formatter)],
) -> PostService:
    """Get Post Service"""
    return PostService(kv, event_log, formatter)


def get_site(request: Request) -> str:
    """Site key derived from the request hostname"""
    return site_from_host(request.url.hostname)


CredentialServiceDep = Annotated[CredentialService, Depends(get_credential_service)]
SessionServiceDep = Annotated[SessionTokenService, Depends(get_session_service)]
PostServiceDep = Annotated[PostService, Depends(get_post_service)]
SiteDep = Annotated[str, Depends(get_site)]


# ============ Auth Dependencies ============

def _extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    if authorization.lower().startswith("bearer "):
        return authorization[7:].strip() or None
    return authorization.strip() or None


def session_token_candidates(request: Request, authorization: str | None) -> list[str]:
    """Session tokens carried by the request: auth cookie first, then Authorization header"""
    tokens = [
        request.cookies.get(get_settings().AUTH_COOKIE_NAME),
        _extract_bearer_token(authorization),
    ]
    return [t for t in tokens if t]


async def verify_request_session(
    request: Request,
    sessions: SessionTokenService,
    authorization: str | None,
) -> SessionClaims | None:
    """Claims of the first valid token; a stale cookie does not shadow a valid header"""
    for token in session_token_candidates(request, authorization):
        claims = await sessions.verify(token)
        if claims is not None:
            return claims
    return None


async def require_admin_auth(
    request: Request,
    sessions: SessionServiceDep,
    authorization: str = Header(None, description="Bearer token"),
) -> SessionClaims:
    """
    Admin endpoint authentication

    Any failure (missing, malformed, forged or expired token) yields the
    same 401 response.
    """
    claims = await verify_request_session(request, sessions, authorization)
    if claims is None:
        raise AuthenticationError()
    return claims

