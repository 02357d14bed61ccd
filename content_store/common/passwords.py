"""
Password Hashing

PBKDF2-HMAC-SHA256 with a random per-credential salt. Salt and derived key are
hex-encoded so the credential record stays plain JSON.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets

PASSWORD_ALGORITHM = "pbkdf2_sha256"
SALT_BYTES = 16
DERIVED_KEY_BYTES = 32
MIN_ITERATIONS = 100000


def generate_salt() -> str:
    return secrets.token_bytes(SALT_BYTES).hex()


def derive_password_hash(password: str, salt: str, iterations: int) -> str:
    """Derive the hex PBKDF2 hash of ``password``.

    The salt is used as its hex text, matching records written by earlier
    deployments.
    """
    dk = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        iterations,
        dklen=DERIVED_KEY_BYTES,
    )
    return dk.hex()


def hashes_match(candidate_hex: str, stored_hex: str) -> bool:
    """Constant-time comparison of two hex digests."""
    try:
        candidate = bytes.fromhex(candidate_hex)
        stored = bytes.fromhex(stored_hex)
    except ValueError:
        return False
    return hmac.compare_digest(candidate, stored)
