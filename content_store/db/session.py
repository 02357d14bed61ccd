"""
Database Session Management Module

Provides asynchronous engine and session management, supporting SQLite and PostgreSQL.
"""

import logging
import re

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from content_store.config import Settings
from content_store.db.models import schema_metadata

logger = logging.getLogger(__name__)

_SAFE_SCHEMA = re.compile(r"^[A-Za-z0-9_]+$")


def safe_schema_name(schema: str | None) -> str:
    """Return ``schema`` if it is a plain identifier, otherwise ``public``."""
    if schema and _SAFE_SCHEMA.match(schema):
        return schema
    return "public"


def create_engine(settings: Settings) -> AsyncEngine:
    """
    Create the asynchronous database engine

    The engine owns the connection pool; every store operation checks a
    connection out of it and returns it when done.
    """
    engine = create_async_engine(
        settings.DATABASE_URL,
        # echo=True prints SQL statements in DEBUG mode
        echo=settings.DEBUG,
        pool_pre_ping=settings.DATABASE_TYPE == "postgresql",
    )

    if settings.DATABASE_TYPE == "postgresql":
        schema = safe_schema_name(settings.DB_SCHEMA)

        # Put the tenant schema first so unqualified table names resolve there
        @event.listens_for(engine.sync_engine, "connect")
        def _set_search_path(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            try:
                # schema is restricted to [A-Za-z0-9_] above
                cursor.execute(f"SET search_path TO {schema}, public")
            except Exception as e:
                logger.warning(f"Failed to set search_path to {schema}: {e}")
            finally:
                cursor.close()

    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create asynchronous session factory"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_db(engine: AsyncEngine, owner_scoped: bool) -> None:
    """
    Initialize Database

    Creates the tables of the requested schema shape when they do not exist.
    Existing tables are left untouched whatever their shape; the running
    shape is detected separately by capability negotiation.
    """
    metadata = schema_metadata(owner_scoped)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
