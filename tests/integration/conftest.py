"""
Integration fixtures: the FastAPI app wired to a test store
"""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from content_store.api.deps import get_formatter, get_store_context
from content_store.main import app
from content_store.services import ContentFormatter, CredentialService

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct horse battery staple"


@pytest_asyncio.fixture
async def client(store_context, kv_repo, event_log):
    await CredentialService(kv_repo, event_log, iterations=100_000).seed_admin(
        ADMIN_EMAIL, ADMIN_PASSWORD
    )

    app.dependency_overrides[get_store_context] = lambda: store_context
    app.dependency_overrides[get_formatter] = lambda: ContentFormatter(api_key="")

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    # Clean up overrides
    app.dependency_overrides = {}


@pytest_asyncio.fixture
async def admin_client(client):
    resp = await client.post(
        "/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    assert resp.status_code == 200, resp.text
    return client


@pytest_asyncio.fixture
async def admin_credentials() -> dict:
    return {"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
