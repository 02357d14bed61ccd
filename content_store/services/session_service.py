"""
Session Token Service Module

Issues and verifies stateless admin session tokens.

Tokens move through issued -> valid -> expired purely by the clock. Nothing is
stored per session, so logout is the client discarding its token; the only
server-side kill switch is rotating the signing secret.
"""

import logging
import secrets
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from content_store.common.time import now_ms, utc_now_iso
from content_store.common.tokens import TOKEN_VERSION, decode_token, encode_token
from content_store.domain.auth import SessionClaims, SessionSecretRecord
from content_store.repositories.kv_store_repo import KVStoreRepository

logger = logging.getLogger(__name__)

SESSION_SECRET_KEY = "admin:session_secret"
SECRET_BYTES = 32
DEFAULT_TTL_MS = 3600 * 1000


class SessionTokenService:
    """
    Session Token Service

    The HMAC key lives in the KV store under ``admin:session_secret`` and is
    created on first use.
    """

    def __init__(self, kv: KVStoreRepository):
        """
        Initialize Service

        Args:
            kv: Key-Value Store Repository
        """
        self.kv = kv

    @staticmethod
    def _new_secret_record() -> SessionSecretRecord:
        return SessionSecretRecord(
            secret=secrets.token_bytes(SECRET_BYTES).hex(),
            created_at=utc_now_iso(),
        )

    async def get_or_create_secret(self) -> bytes:
        """
        Fetch the signing secret, creating it on first need

        Racing cold starts all end up with the first committed secret. An
        unreadable stored record is replaced like an absent one.
        """
        raw = await self.kv.get(SESSION_SECRET_KEY)
        if raw is None:
            raw = await self.kv.put_if_absent(
                SESSION_SECRET_KEY, self._new_secret_record().model_dump()
            )
            logger.info("Session secret initialized")

        record = self._parse(raw)
        if record is not None:
            return record.secret_bytes

        logger.warning("Stored session secret is unreadable; replacing it")
        record = self._new_secret_record()
        await self.kv.put(SESSION_SECRET_KEY, record.model_dump())
        # a concurrent replacement may have committed after ours
        stored = self._parse(await self.kv.get(SESSION_SECRET_KEY))
        return (stored or record).secret_bytes

    @staticmethod
    def _parse(raw) -> Optional[SessionSecretRecord]:
        if raw is None:
            return None
        try:
            return SessionSecretRecord.model_validate(raw)
        except PydanticValidationError:
            return None

    async def rotate_secret(self) -> None:
        """Replace the signing secret; every outstanding token becomes invalid."""
        await self.kv.put(SESSION_SECRET_KEY, self._new_secret_record().model_dump())
        logger.warning("Session secret rotated")

    async def issue(
        self,
        sub: str,
        ttl_ms: int = DEFAULT_TTL_MS,
        now: int | None = None,
    ) -> str:
        """
        Issue a signed session token

        Args:
            sub: Principal identifier
            ttl_ms: Lifetime in milliseconds
            now: Issue time in epoch ms (defaults to the current time)
        """
        issued_at = now_ms() if now is None else int(now)
        claims = {
            "sub": sub,
            "iat": issued_at,
            "exp": issued_at + int(ttl_ms),
            "ver": TOKEN_VERSION,
        }
        secret = await self.get_or_create_secret()
        return encode_token(claims, secret)

    async def verify(self, token: str | None, now: int | None = None) -> Optional[SessionClaims]:
        """
        Verify a session token

        Returns:
            SessionClaims: token is authentic and unexpired
            None: token is malformed, forged, of an unknown version or expired
        """
        if not token:
            return None

        secret = await self.get_or_create_secret()
        payload = decode_token(token, secret)
        if payload is None:
            return None

        try:
            claims = SessionClaims.model_validate(payload, strict=True)
        except PydanticValidationError:
            return None

        if claims.ver != TOKEN_VERSION:
            return None
        current_time = now_ms() if now is None else int(now)
        if current_time >= claims.exp:
            return None
        return claims
