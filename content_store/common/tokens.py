"""
Session Token Codec

Compact signed tokens of the form ``<header>.<payload>.<signature>``, each part
unpadded URL-safe base64. The header is fixed to HMAC-SHA256 / JWT so standard
tooling can read the claims. Signing keys are passed in explicitly; storage of
the key is the session service's job.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
from typing import Any


TOKEN_VERSION = 1
TOKEN_HEADER = {"alg": "HS256", "typ": "JWT"}


def b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("utf-8").rstrip("=")


def b64url_decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode((data + padding).encode("ascii"))


def _dump(obj: dict[str, Any]) -> str:
    raw = json.dumps(obj, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    return b64url_encode(raw)


def _sign(signing_input: str, secret: bytes) -> bytes:
    return hmac.new(secret, signing_input.encode("utf-8"), hashlib.sha256).digest()


def encode_token(claims: dict[str, Any], secret: bytes) -> str:
    """Serialize and sign ``claims``."""
    header_b64 = _dump(TOKEN_HEADER)
    payload_b64 = _dump(claims)
    signature = _sign(f"{header_b64}.{payload_b64}", secret)
    return f"{header_b64}.{payload_b64}.{b64url_encode(signature)}"


def decode_token(token: str, secret: bytes) -> dict[str, Any] | None:
    """
    Verify the signature of ``token`` and return its claims.

    Expiry is not checked here.

    Returns:
        dict: payload (signature valid)
        None: malformed token or signature mismatch
    """
    if not isinstance(token, str):
        return None
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts

    # Compare the encoded form: distinct base64 strings can decode to the same
    # bytes through the unused trailing bits.
    expected_sig = b64url_encode(_sign(f"{header_b64}.{payload_b64}", secret))
    if not hmac.compare_digest(expected_sig.encode("utf-8"), signature_b64.encode("utf-8")):
        return None

    try:
        header = json.loads(b64url_decode(header_b64).decode("utf-8"))
        payload = json.loads(b64url_decode(payload_b64).decode("utf-8"))
    except (binascii.Error, ValueError):
        # JSONDecodeError and UnicodeDecodeError are ValueErrors
        return None

    if header != TOKEN_HEADER or not isinstance(payload, dict):
        return None
    return payload
