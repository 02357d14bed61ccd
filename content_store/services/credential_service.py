"""
Credential Service Module

Seeds and verifies the credential of the single administrative principal.
There is exactly one principal; its identifier comes from configuration.
"""

import asyncio
import logging

from pydantic import ValidationError as PydanticValidationError

from content_store.common.passwords import (
    MIN_ITERATIONS,
    PASSWORD_ALGORITHM,
    derive_password_hash,
    generate_salt,
    hashes_match,
)
from content_store.common.time import utc_now_iso
from content_store.domain.auth import CredentialRecord
from content_store.repositories.event_log_repo import EventLogRepository
from content_store.repositories.kv_store_repo import KVStoreRepository

logger = logging.getLogger(__name__)

CREDENTIAL_KEY = "admin:user"
DEFAULT_ITERATIONS = 150000


class CredentialService:
    """
    Credential Service

    Stores a PBKDF2-HMAC-SHA256 credential under ``admin:user``.
    Key derivation runs in a worker thread to keep the event loop free.
    """

    def __init__(
        self,
        kv: KVStoreRepository,
        event_log: EventLogRepository,
        iterations: int = DEFAULT_ITERATIONS,
    ):
        """
        Initialize Service

        Args:
            kv: Key-Value Store Repository
            event_log: Audit sink
            iterations: KDF iterations for newly created credentials
        """
        if iterations < MIN_ITERATIONS:
            raise ValueError(f"iterations must be at least {MIN_ITERATIONS}")
        self.kv = kv
        self.event_log = event_log
        self.iterations = iterations

    @staticmethod
    def _parse(raw) -> CredentialRecord | None:
        try:
            return CredentialRecord.model_validate(raw)
        except PydanticValidationError:
            logger.warning("Stored admin credential is malformed")
            return None

    async def _load(self) -> CredentialRecord | None:
        raw = await self.kv.get(CREDENTIAL_KEY)
        if raw is None:
            return None
        return self._parse(raw)

    async def _build_record(self, identifier: str, password: str) -> CredentialRecord:
        salt = generate_salt()
        hashed = await asyncio.to_thread(derive_password_hash, password, salt, self.iterations)
        return CredentialRecord(
            email=identifier,
            algo=PASSWORD_ALGORITHM,
            iterations=self.iterations,
            salt=salt,
            hash=hashed,
            created_at=utc_now_iso(),
        )

    async def ensure_principal(self, identifier: str, password: str) -> None:
        """
        Seed the admin credential (idempotent)

        An existing credential for the same identifier is never re-hashed or
        overwritten. A credential for a different identifier, or one that
        cannot be read, is replaced by the configured principal.
        """
        raw = await self.kv.get(CREDENTIAL_KEY)
        existing = self._parse(raw) if raw is not None else None
        if existing is not None and existing.email == identifier:
            return

        record = await self._build_record(identifier, password)
        if raw is None:
            # concurrent first boots converge on one record
            stored = await self.kv.put_if_absent(CREDENTIAL_KEY, record.model_dump())
            if stored == record.model_dump():
                logger.info("Admin credential created")
            else:
                logger.info("Admin credential already created by another instance")
        elif existing is None:
            await self.kv.put(CREDENTIAL_KEY, record.model_dump())
            logger.warning("Malformed admin credential replaced")
        else:
            await self.kv.put(CREDENTIAL_KEY, record.model_dump())
            logger.warning("Admin principal changed; stored credential replaced")

    async def seed_admin(self, identifier: str, password: str) -> None:
        """
        Startup wrapper around ``ensure_principal`` that never raises

        A failed seed is logged and audited; the process keeps starting.
        """
        try:
            await self.ensure_principal(identifier, password)
        except Exception as e:
            logger.exception("Failed to seed admin credential")
            await self.event_log.log("admin_seed_error", {"message": str(e)})

    async def verify_password(self, identifier: str, password: str) -> bool:
        """
        Check a login attempt

        Unknown principal, wrong password and malformed records all return
        False; they are expected outcomes, not errors.
        """
        record = await self._load()
        if record is None or record.email != identifier:
            return False
        if record.algo != PASSWORD_ALGORITHM:
            return False

        candidate = await asyncio.to_thread(
            derive_password_hash, password, record.salt, record.iterations
        )
        return hashes_match(candidate, record.hash)
