"""
Configuration Management Module

Configures application parameters via environment variables or .env file.
Supports SQLite (default) and PostgreSQL databases.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application Configuration Class

    All configuration items can be overridden by environment variables, with names matching fields (uppercase).
    """

    # Application Config
    APP_NAME: str = "Content Store"
    DEBUG: bool = False

    # Database Config
    # Supports "sqlite" or "postgresql"
    DATABASE_TYPE: Literal["sqlite", "postgresql"] = "sqlite"
    # SQLite default database path, PostgreSQL requires full connection string
    DATABASE_URL: str = "sqlite+aiosqlite:///./content_store.db"
    # PostgreSQL schema placed first on the search_path of every connection.
    # Only [A-Za-z0-9_] names are honored, anything else falls back to "public".
    DB_SCHEMA: str = "public"

    # Storage Owner Config
    # Fixed owner written to the user_id column when the deployed tables carry one
    STORE_OWNER_ID: str = "default"
    # Whether init_db() creates fresh tables with the user_id column.
    # Existing tables are never altered; their shape is detected at startup.
    STORE_OWNER_COLUMN: bool = True

    # Admin Principal
    # The admin credential is seeded on startup when both are set.
    ADMIN_EMAIL: str | None = None
    ADMIN_PASSWORD: str | None = None
    # PBKDF2-HMAC-SHA256 iterations for newly seeded credentials
    PASSWORD_HASH_ITERATIONS: int = 150000

    # Session Config
    # Session token TTL (seconds)
    SESSION_TTL_SECONDS: int = 86400
    AUTH_COOKIE_NAME: str = "auth"
    AUTH_COOKIE_SECURE: bool = False

    # Site Assets
    # Per-site index.html and style.css live in <SITES_DIR>/<site>/
    SITES_DIR: str = "sites"

    # Content Formatter Config
    # When unset, posts are rendered with the built-in fallback formatter
    OPENAI_API_KEY: str | None = None
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_MODEL: str = "gpt-4o-mini"
    # Request timeout (seconds)
    HTTP_TIMEOUT: int = 60

    # CORS Config
    # Comma-separated list of allowed origins for CORS
    # Example: "http://localhost:3000,https://example.com"
    ALLOWED_ORIGINS: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get application configuration (Singleton)

    Uses lru_cache to ensure configuration is loaded only once.

    Returns:
        Settings: Application configuration instance
    """
    return Settings()
