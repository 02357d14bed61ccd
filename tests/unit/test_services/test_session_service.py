"""
Test Session Token Service
"""

import asyncio
import json

import pytest

from content_store.common.tokens import b64url_decode, b64url_encode
from content_store.repositories.sqlalchemy.kv_store_repo import SQLAlchemyKVStoreRepository
from content_store.services.credential_service import CredentialService
from content_store.services.session_service import SESSION_SECRET_KEY, SessionTokenService

NOW = 1_700_000_000_000


@pytest.fixture
def sessions(kv_repo) -> SessionTokenService:
    return SessionTokenService(kv_repo)


@pytest.mark.asyncio
async def test_issue_and_verify(sessions):
    token = await sessions.issue("a@x.com", ttl_ms=1000, now=NOW)

    claims = await sessions.verify(token, now=NOW)

    assert claims is not None
    assert claims.sub == "a@x.com"
    assert claims.iat == NOW
    assert claims.exp == NOW + 1000
    assert claims.ver == 1


@pytest.mark.asyncio
async def test_token_layout(sessions):
    token = await sessions.issue("a@x.com", ttl_ms=1000, now=NOW)

    header_b64, payload_b64, signature_b64 = token.split(".")

    assert "=" not in token
    assert json.loads(b64url_decode(header_b64)) == {"alg": "HS256", "typ": "JWT"}
    assert json.loads(b64url_decode(payload_b64)) == {
        "sub": "a@x.com",
        "iat": NOW,
        "exp": NOW + 1000,
        "ver": 1,
    }
    assert len(b64url_decode(signature_b64)) == 32


@pytest.mark.asyncio
async def test_token_expires(sessions):
    token = await sessions.issue("a@x.com", ttl_ms=1000, now=NOW)

    assert await sessions.verify(token, now=NOW + 999) is not None
    assert await sessions.verify(token, now=NOW + 1000) is None
    assert await sessions.verify(token, now=NOW + 5000) is None


@pytest.mark.asyncio
async def test_altered_signature_is_rejected(sessions):
    token = await sessions.issue("a@x.com", ttl_ms=60000, now=NOW)
    header_b64, payload_b64, signature_b64 = token.split(".")

    for i, ch in enumerate(signature_b64):
        replacement = "A" if ch != "A" else "B"
        forged_sig = signature_b64[:i] + replacement + signature_b64[i + 1:]
        forged = f"{header_b64}.{payload_b64}.{forged_sig}"
        assert await sessions.verify(forged, now=NOW) is None, f"position {i}"


@pytest.mark.asyncio
async def test_altered_payload_is_rejected(sessions):
    token = await sessions.issue("a@x.com", ttl_ms=60000, now=NOW)
    header_b64, _, signature_b64 = token.split(".")
    payload = {"sub": "evil@x.com", "iat": NOW, "exp": NOW + 10**9, "ver": 1}
    forged_payload = b64url_encode(json.dumps(payload, separators=(",", ":")).encode())

    assert await sessions.verify(f"{header_b64}.{forged_payload}.{signature_b64}", now=NOW) is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "token",
    [None, "", "abc", "a.b", "a.b.c.d", "###.###.###", "é.é.é"],
)
async def test_malformed_tokens_are_invalid(sessions, token):
    assert await sessions.verify(token, now=NOW) is None


@pytest.mark.asyncio
async def test_rotated_secret_invalidates_tokens(sessions):
    token = await sessions.issue("a@x.com", ttl_ms=60000, now=NOW)
    old_secret = await sessions.get_or_create_secret()

    await sessions.rotate_secret()

    assert await sessions.get_or_create_secret() != old_secret
    assert await sessions.verify(token, now=NOW) is None
    fresh = await sessions.issue("a@x.com", ttl_ms=60000, now=NOW)
    assert await sessions.verify(fresh, now=NOW) is not None


@pytest.mark.asyncio
async def test_token_from_other_store_is_rejected(sessions, unscoped_context):
    other = SessionTokenService(SQLAlchemyKVStoreRepository(unscoped_context))
    token = await other.issue("a@x.com", ttl_ms=60000, now=NOW)

    assert await other.verify(token, now=NOW) is not None
    assert await sessions.verify(token, now=NOW) is None


@pytest.mark.asyncio
async def test_secret_created_once(sessions, kv_repo):
    assert await kv_repo.get(SESSION_SECRET_KEY) is None

    secrets_seen = await asyncio.gather(*(sessions.get_or_create_secret() for _ in range(5)))

    assert len(set(secrets_seen)) == 1
    assert len(secrets_seen[0]) == 32
    stored = await kv_repo.get(SESSION_SECRET_KEY)
    assert bytes.fromhex(stored["secret"]) == secrets_seen[0]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "stored",
    [
        {"secret": ""},
        {"secret": "ab" * 8, "created_at": "2024-01-01T00:00:00.000Z"},
        {"secret": "zz" * 32, "created_at": "2024-01-01T00:00:00.000Z"},
        {"created_at": "2024-01-01T00:00:00.000Z"},
        "not-a-record",
    ],
)
async def test_unreadable_secret_is_replaced(sessions, kv_repo, stored):
    await kv_repo.put(SESSION_SECRET_KEY, stored)

    assert await sessions.verify("a.b.c") is None

    token = await sessions.issue("a@x.com", ttl_ms=1000, now=NOW)
    assert (await sessions.verify(token, now=NOW)).sub == "a@x.com"
    replaced = await kv_repo.get(SESSION_SECRET_KEY)
    assert len(bytes.fromhex(replaced["secret"])) == 32


@pytest.mark.asyncio
async def test_secret_without_created_at_is_kept(sessions, kv_repo):
    legacy = {"secret": "cd" * 32}
    await kv_repo.put(SESSION_SECRET_KEY, legacy)

    assert await sessions.get_or_create_secret() == bytes.fromhex("cd" * 32)
    assert await kv_repo.get(SESSION_SECRET_KEY) == legacy


@pytest.mark.asyncio
async def test_login_scenario_with_real_clock(kv_repo, event_log, sessions):
    credentials = CredentialService(kv_repo, event_log, iterations=100000)
    await credentials.ensure_principal("a@x.com", "pw123")
    assert await credentials.verify_password("a@x.com", "pw123") is True

    token = await sessions.issue("a@x.com", ttl_ms=1000)
    claims = await sessions.verify(token)
    assert claims is not None
    assert claims.sub == "a@x.com"

    await asyncio.sleep(1.05)
    assert await sessions.verify(token) is None
