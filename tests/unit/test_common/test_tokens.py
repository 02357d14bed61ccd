"""
Test session token codec
"""

import json

from content_store.common.tokens import (
    TOKEN_HEADER,
    _sign,
    b64url_decode,
    b64url_encode,
    decode_token,
    encode_token,
)

SECRET = b"s" * 32


def test_encode_produces_three_unpadded_parts():
    token = encode_token({"sub": "admin@example.com"}, SECRET)

    parts = token.split(".")
    assert len(parts) == 3
    assert all("=" not in part for part in parts)
    assert json.loads(b64url_decode(parts[0])) == TOKEN_HEADER


def test_decode_returns_claims():
    claims = {"sub": "admin@example.com", "iat": 1, "exp": 2, "ver": 1}

    assert decode_token(encode_token(claims, SECRET), SECRET) == claims


def test_wrong_secret_rejected():
    token = encode_token({"sub": "x"}, SECRET)

    assert decode_token(token, b"t" * 32) is None


def test_header_must_match():
    header = b64url_encode(json.dumps({"alg": "none", "typ": "JWT"}).encode())
    payload = b64url_encode(b'{"sub":"x"}')
    signature = b64url_encode(_sign(f"{header}.{payload}", SECRET))

    assert decode_token(f"{header}.{payload}.{signature}", SECRET) is None


def test_non_object_payload_rejected():
    header = b64url_encode(json.dumps(TOKEN_HEADER, separators=(",", ":")).encode())
    payload = b64url_encode(b"[1,2,3]")
    signature = b64url_encode(_sign(f"{header}.{payload}", SECRET))

    assert decode_token(f"{header}.{payload}.{signature}", SECRET) is None


def test_non_string_token_rejected():
    assert decode_token(None, SECRET) is None
    assert decode_token(b"a.b.c", SECRET) is None
