"""Application configuration module."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Mapping

from dotenv import load_dotenv

if os.getenv("APP_ENV") == "dev":
    load_dotenv()


HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "y"}


def _notification_backend() -> str:
    """Pick the SMS backend; the log backend needs an explicit opt-in outside dev."""

    explicit = os.getenv("NOTIFICATION_BACKEND")
    if explicit:
        return explicit.strip().lower()
    if os.getenv("APP_ENV") == "dev" and not os.getenv("TWILIO_ACCOUNT_SID"):
        return "log"
    return "twilio"


class Config:
    """Base configuration for the Flask application."""

    # Core
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    APP_SECRET = os.getenv("APP_SECRET", SECRET_KEY)
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "pbkdf2:sha256:600000")
    DATABASE_URL = os.getenv("DATABASE_URL") or os.getenv("DSN", "sqlite:///app.db")
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    HTTP_PORT = int(os.getenv("HTTP_PORT", 5000))
    AUTO_CREATE_TABLES = _env_flag("AUTO_CREATE_TABLES")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # CORS
    _raw_origins = os.getenv("ORIGINS", "http://localhost:3000")
    if _raw_origins.strip() == "*":
        CORS_ORIGINS = "*"
    else:
        CORS_ORIGINS = [o.strip() for o in _raw_origins.split(",") if o.strip()]
    CORS_ALLOW_HEADERS = ["Content-Type", "Accept", "Authorization"]

    # Rate limiting
    RATE_LIMIT = os.getenv("RATE_LIMIT", "60 per minute")
    RATELIMIT_HEADERS_ENABLED = True
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_KEY_PREFIX = os.getenv("RATELIMIT_KEY_PREFIX", "")

    # Notifications
    TWILIO_ACCOUNT_SID = os.getenv("TWILIO_ACCOUNT_SID")
    TWILIO_AUTH_TOKEN = os.getenv("TWILIO_AUTH_TOKEN")
    TWILIO_FROM_PHONE_NUMBER = os.getenv("TWILIO_FROM_PHONE_NUMBER")
    NOTIFICATION_BACKEND = _notification_backend()
    TWILIO_API_BASE = os.getenv("TWILIO_API_BASE", "https://api.twilio.com/2010-04-01")


@dataclass(frozen=True)
class Settings:
    """Immutable runtime settings handed to the services at construction."""

    app_secret: str
    jwt_algorithm: str = "HS256"
    token_lifetime: timedelta = timedelta(days=30)
    code_lifetime: timedelta = timedelta(minutes=30)
    code_digits: int = 6
    password_hash_method: str = "pbkdf2:sha256:600000"
    notification_backend: str = "twilio"
    twilio_account_sid: str | None = None
    twilio_auth_token: str | None = None
    twilio_from_number: str | None = None
    twilio_api_base: str = "https://api.twilio.com/2010-04-01"

    def __post_init__(self) -> None:
        if not self.app_secret:
            raise RuntimeError("APP_SECRET must be configured to sign tokens.")
        if self.jwt_algorithm not in HMAC_ALGORITHMS:
            raise RuntimeError(
                f"JWT_ALGORITHM must be one of {', '.join(HMAC_ALGORITHMS)}."
            )

    @classmethod
    def from_mapping(cls, config: Mapping) -> "Settings":
        """Build settings from a Flask config (or any mapping)."""

        return cls(
            app_secret=config.get("APP_SECRET") or config.get("SECRET_KEY") or "",
            jwt_algorithm=config.get("JWT_ALGORITHM", "HS256"),
            password_hash_method=config.get(
                "PASSWORD_HASH_METHOD", "pbkdf2:sha256:600000"
            ),
            notification_backend=(config.get("NOTIFICATION_BACKEND") or "twilio").lower(),
            twilio_account_sid=config.get("TWILIO_ACCOUNT_SID"),
            twilio_auth_token=config.get("TWILIO_AUTH_TOKEN"),
            twilio_from_number=config.get("TWILIO_FROM_PHONE_NUMBER"),
            twilio_api_base=config.get(
                "TWILIO_API_BASE", "https://api.twilio.com/2010-04-01"
            ),
        )
