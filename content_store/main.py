"""
Content Store Application

Wires the store context, the auth and post routers and the public pages into
one FastAPI app. Run with ``uvicorn content_store.main:app``.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRouter

from content_store.api.admin import posts_router
from content_store.api.auth import router as auth_router
from content_store.api.pages import router as pages_router
from content_store.common.errors import AppError
from content_store.config import Settings, get_settings
from content_store.db.context import StoreContext
from content_store.db.session import init_db
from content_store.logging_config import setup_logging
from content_store.repositories.sqlalchemy import (
    SQLAlchemyEventLogRepository,
    SQLAlchemyKVStoreRepository,
)
from content_store.repositories.sqlalchemy.base import translate_backend_errors
from content_store.services.credential_service import CredentialService

logger = logging.getLogger(__name__)

setup_logging()

_INTERNAL_ERROR = AppError("Internal server error", error_type="internal_error")


async def _seed_admin(context: StoreContext, settings: Settings) -> None:
    if not (settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD):
        logger.warning("ADMIN_EMAIL/ADMIN_PASSWORD not set; admin login is unavailable")
        return
    credentials = CredentialService(
        SQLAlchemyKVStoreRepository(context),
        SQLAlchemyEventLogRepository(context),
        iterations=settings.PASSWORD_HASH_ITERATIONS,
    )
    await credentials.seed_admin(settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: create missing tables, probe the schema shape once, seed the
    admin credential. An unreachable database aborts startup with
    BackendUnavailable. Shutdown: release the connection pool.
    """
    settings = get_settings()
    context = StoreContext.from_settings(settings)
    try:
        # capabilities are probed once and never re-read, so no degraded start
        async with translate_backend_errors("init_db"):
            await init_db(context.engine, owner_scoped=settings.STORE_OWNER_COLUMN)
    except AppError as e:
        logger.error(f"Database initialization failed, aborting startup: {e.details}")
        await context.dispose()
        raise
    caps = await context.negotiate()
    logger.info(
        f"Store ready (owner={settings.STORE_OWNER_ID}, "
        f"kv_owner_column={caps.kv_owner_column}, audit_owner_column={caps.audit_owner_column})"
    )
    app.state.store_context = context
    await _seed_admin(context, settings)

    yield

    await context.dispose()


def _cors_origins(settings: Settings) -> list[str]:
    origins = [o.strip() for o in settings.ALLOWED_ORIGINS.split(",") if o.strip()]
    if not origins and settings.DEBUG:
        return ["http://localhost:3000", "http://127.0.0.1:3000"]
    return origins


settings = get_settings()

app = FastAPI(
    title=settings.APP_NAME,
    description="Multi-site content store with an authenticated key-value core",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(settings),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Render AppError; details only leave the process in DEBUG mode."""
    if exc.status_code >= 500:
        logger.warning(f"{request.method} {request.url.path} failed: {exc.code} {exc.details}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(include_details=get_settings().DEBUG),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Uncaught exception on {request.url.path}")
    return JSONResponse(status_code=500, content=_INTERNAL_ERROR.to_dict(include_details=False))


@app.get("/health", tags=["Health"])
async def health_check():
    """Liveness probe"""
    return {"status": "healthy"}


api_router = APIRouter(prefix="/api")
api_router.include_router(auth_router)
api_router.include_router(posts_router)
app.include_router(api_router)
app.include_router(pages_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("content_store.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
