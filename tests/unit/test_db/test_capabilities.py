"""
Test Schema Capability Negotiation
"""

import asyncio

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from content_store.db import capabilities as capabilities_module
from content_store.db.capabilities import UNSCOPED, CapabilityCache, StoreCapabilities, probe_capabilities
from content_store.db.context import StoreContext
from content_store.repositories.sqlalchemy.kv_store_repo import SQLAlchemyKVStoreRepository


@pytest.mark.asyncio
async def test_probe_detects_owner_columns(async_engine):
    capabilities = await probe_capabilities(async_engine)

    assert capabilities == StoreCapabilities(kv_owner_column=True, audit_owner_column=True)


@pytest.mark.asyncio
async def test_probe_detects_unscoped_tables(unscoped_engine):
    assert await probe_capabilities(unscoped_engine) == UNSCOPED


@pytest.mark.asyncio
async def test_probe_without_tables_is_unscoped(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    try:
        assert await probe_capabilities(engine) == UNSCOPED
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_probe_failure_defaults_to_unscoped(async_engine, monkeypatch):
    def broken(sync_conn):
        raise RuntimeError("catalog unavailable")

    monkeypatch.setattr(capabilities_module, "_read_owner_columns", broken)

    assert await probe_capabilities(async_engine) == UNSCOPED


@pytest.mark.asyncio
async def test_store_keeps_working_after_probe_failure(unscoped_context, monkeypatch):
    """Test that a failed probe leaves the store usable in unscoped mode"""
    def broken(sync_conn):
        raise RuntimeError("catalog unavailable")

    monkeypatch.setattr(capabilities_module, "_read_owner_columns", broken)
    repo = SQLAlchemyKVStoreRepository(unscoped_context)

    await repo.put("after:probe", {"ok": True})

    assert await repo.get("after:probe") == {"ok": True}
    assert unscoped_context.capabilities.value == UNSCOPED


@pytest.mark.asyncio
async def test_capabilities_computed_once(async_engine, monkeypatch):
    calls = []
    original = capabilities_module._read_owner_columns

    def counting(sync_conn):
        calls.append(1)
        return original(sync_conn)

    monkeypatch.setattr(capabilities_module, "_read_owner_columns", counting)
    cache = CapabilityCache(async_engine)

    results = await asyncio.gather(*(cache.get() for _ in range(5)))
    await cache.get()

    assert len(calls) == 1
    assert all(r.kv_owner_column for r in results)


@pytest.mark.asyncio
async def test_pinned_capabilities_are_not_recomputed(async_engine):
    context = StoreContext.from_engine(async_engine, "owner")
    context.capabilities.set(UNSCOPED)

    assert await context.negotiate() == UNSCOPED
    context.capabilities.set(StoreCapabilities(kv_owner_column=True))
    assert context.capabilities.value == UNSCOPED
