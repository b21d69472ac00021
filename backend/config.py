"""
DevConnect configuration -- all environment variables in one place.

Read from environment at runtime. Never hardcode secrets.
"""

from __future__ import annotations

import os


class Settings:
    """Application settings from environment variables."""

    # Document store: "postgres" or "memory"
    STORE_BACKEND: str = os.environ.get("STORE_BACKEND", "postgres").lower()

    # Database
    DATABASE_URL: str = os.environ.get("DATABASE_URL", "")
    DB_POOL_MIN_SIZE: int = int(os.environ.get("DB_POOL_MIN_SIZE", "2"))
    DB_POOL_MAX_SIZE: int = int(os.environ.get("DB_POOL_MAX_SIZE", "20"))

    # Auth
    JWT_SECRET: str = os.environ.get("JWT_SECRET", "")
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRY_HOURS: int = int(os.environ.get("JWT_EXPIRY_HOURS", "1"))
    BCRYPT_ROUNDS: int = int(os.environ.get("BCRYPT_ROUNDS", "10"))

    # Avatars
    GRAVATAR_URL: str = "https://www.gravatar.com/avatar"

    # Application
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
    CORS_ORIGINS: list[str] = [o for o in os.environ.get("CORS_ORIGINS", "").split(",") if o]


# Singleton instance
settings = Settings()

if settings.STORE_BACKEND not in ("postgres", "memory"):
    raise RuntimeError(f"Unknown STORE_BACKEND: {settings.STORE_BACKEND}")
if settings.STORE_BACKEND == "postgres" and not settings.DATABASE_URL:
    raise RuntimeError("DATABASE_URL environment variable is required")
if not settings.JWT_SECRET:
    raise RuntimeError("JWT_SECRET environment variable is required")
