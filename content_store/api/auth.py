"""
Login Authentication API

- POST /auth/login: exchange email and password for a session cookie
- POST /auth/logout: clear the session cookie
- GET /auth/status: whether the caller holds a valid session
"""

from fastapi import APIRouter, Header, Request, Response
from pydantic import BaseModel, Field

from content_store.api.deps import (
    CredentialServiceDep,
    EventLogDep,
    SessionServiceDep,
    verify_request_session,
)
from content_store.common.errors import AuthenticationError
from content_store.config import get_settings


router = APIRouter(prefix="/auth", tags=["Auth"])


class AuthStatusResponse(BaseModel):
    authenticated: bool


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    ok: bool = True
    expires_in: int


class OkResponse(BaseModel):
    ok: bool = True


@router.get("/status", response_model=AuthStatusResponse)
async def auth_status(
    request: Request,
    sessions: SessionServiceDep,
    authorization: str = Header(None, description="Bearer token"),
):
    claims = await verify_request_session(request, sessions, authorization)
    return AuthStatusResponse(authenticated=claims is not None)


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    response: Response,
    credentials: CredentialServiceDep,
    sessions: SessionServiceDep,
    event_log: EventLogDep,
):
    settings = get_settings()
    if not await credentials.verify_password(data.email, data.password):
        await event_log.log("admin_login_failed", {"email": data.email})
        raise AuthenticationError()

    token = await sessions.issue(data.email, ttl_ms=settings.SESSION_TTL_SECONDS * 1000)
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_TTL_SECONDS,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.AUTH_COOKIE_SECURE,
    )
    await event_log.log("admin_login", {"email": data.email})
    return LoginResponse(expires_in=settings.SESSION_TTL_SECONDS)


@router.post("/logout", response_model=OkResponse)
async def logout(response: Response, event_log: EventLogDep):
    # Tokens are stateless: the server only tells the client to drop its copy
    settings = get_settings()
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value="",
        max_age=0,
        expires=0,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.AUTH_COOKIE_SECURE,
    )
    await event_log.log("admin_logout", {})
    return OkResponse()
