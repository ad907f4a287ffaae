"""
Centralised application settings loaded from environment / .env file.

Uses pydantic-settings so every value can be overridden via env vars
or the .env file at the project root.
"""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Project ──────────────────────────────────────────────────────
    PROJECT_NAME: str = "QR Docs Storage Desk"
    VERSION: str = "1.0.0"
    API_V1_PREFIX: str = "/api/v1"

    # ── Role secrets (one per password entry point) ─────────────────
    CASHIER_SECRET: str = "25"
    HEAD_CASHIER_SECRET: str = "202520"
    ADMIN_SECRET: str = "2025"
    CREATOR_SECRET: str = "202505"
    NIKITOVSKY_SECRET: str = "20252025"
    ROLE24_SECRET: str = "24242424"

    # ── Login lockout ────────────────────────────────────────────────
    MAX_FAILED_ATTEMPTS: int = 3
    LOCKOUT_SECONDS: int = 90
    LOCKOUT_TICK_SECONDS: float = 1.0
    LOCKOUT_SCOPE: str = "global"  # global | client

    @field_validator("LOCKOUT_SCOPE")
    @classmethod
    def _check_scope(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in {"global", "client"}:
            raise ValueError("LOCKOUT_SCOPE must be 'global' or 'client'")
        return v

    # ── JWT session tokens ───────────────────────────────────────────
    SECRET_KEY: str = "CHANGE-ME-TO-A-RANDOM-64-CHAR-HEX-STRING-IN-PRODUCTION"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480
    COOKIE_SECURE: bool = False  # Set True in HTTPS production

    # ── Rate limiting ────────────────────────────────────────────────
    RATE_LIMIT_ENABLED: bool = True
    LOGIN_RATE_LIMIT: str = "20/minute"

    # ── CORS ─────────────────────────────────────────────────────────
    CORS_ORIGINS: list[str] = [
        "http://localhost",
        "http://localhost:5173",
        "http://127.0.0.1",
        "http://127.0.0.1:5173",
    ]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors(cls, v: object) -> list[str]:
        if isinstance(v, str):
            return [o.strip() for o in v.split(",") if o.strip()]
        return v  # type: ignore[return-value]

    # ── Logging ──────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }


settings = Settings()

if settings.SECRET_KEY == "CHANGE-ME-TO-A-RANDOM-64-CHAR-HEX-STRING-IN-PRODUCTION":
    import logging

    logging.getLogger("qrdocs.core.config").warning(
        "WARNING: You are running with the default INSECURE Secret Key! "
        "Update the SECRET_KEY in your .env file immediately."
    )
