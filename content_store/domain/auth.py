"""
Auth Domain Models

Defines the stored admin credential, the stored session secret and the
claims carried by session tokens.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CredentialRecord(BaseModel):
    """Admin credential as stored under ``admin:user``"""

    email: str = Field(..., description="Principal identifier")
    algo: str = Field(..., description="Key derivation algorithm tag")
    iterations: int = Field(..., gt=0, description="KDF iteration count")
    salt: str = Field(..., description="Hex-encoded random salt")
    hash: str = Field(..., description="Hex-encoded derived key")
    created_at: str = Field(..., description="Creation Time (ISO-8601)")


class SessionSecretRecord(BaseModel):
    """HMAC key for session tokens as stored under ``admin:session_secret``"""

    secret: str = Field(..., min_length=64, description="Hex-encoded secret bytes")
    created_at: Optional[str] = Field(None, description="Creation Time (ISO-8601)")

    @field_validator("secret")
    @classmethod
    def check_hex(cls, v: str) -> str:
        bytes.fromhex(v)
        return v

    @property
    def secret_bytes(self) -> bytes:
        return bytes.fromhex(self.secret)


class SessionClaims(BaseModel):
    """Verified session token payload"""

    sub: str
    iat: int = Field(..., description="Issued at (epoch ms)")
    exp: int = Field(..., description="Expires at (epoch ms)")
    ver: int

    model_config = ConfigDict(extra="ignore")
