"""
Test Configuration Module
"""

from typing import AsyncGenerator

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from content_store.db.context import StoreContext
from content_store.db.session import init_db
from content_store.repositories.sqlalchemy import (
    SQLAlchemyEventLogRepository,
    SQLAlchemyKVStoreRepository,
)

OWNER_ID = "owner-test"


def _sqlite_url(path) -> str:
    # File-backed so every pooled connection sees the same database
    return f"sqlite+aiosqlite:///{path}"


@pytest_asyncio.fixture
async def async_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Create async database engine for testing (owner-scoped schema)"""
    engine = create_async_engine(_sqlite_url(tmp_path / "scoped.db"), echo=False)
    await init_db(engine, owner_scoped=True)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def unscoped_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Create async database engine for testing (schema without user_id)"""
    engine = create_async_engine(_sqlite_url(tmp_path / "unscoped.db"), echo=False)
    await init_db(engine, owner_scoped=False)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def store_context(async_engine) -> StoreContext:
    return StoreContext.from_engine(async_engine, OWNER_ID)


@pytest_asyncio.fixture
async def unscoped_context(unscoped_engine) -> StoreContext:
    return StoreContext.from_engine(unscoped_engine, OWNER_ID)


@pytest_asyncio.fixture
async def kv_repo(store_context) -> SQLAlchemyKVStoreRepository:
    return SQLAlchemyKVStoreRepository(store_context)


@pytest_asyncio.fixture
async def event_log(store_context) -> SQLAlchemyEventLogRepository:
    return SQLAlchemyEventLogRepository(store_context)
