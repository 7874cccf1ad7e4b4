"""Environment-driven settings, one class per deployment environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Any, Final

from dotenv import load_dotenv

ENV_VAR: Final[str] = "APP_ENV"  # development | testing | production

TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "y", "on"})

# Placeholders that must never sign tokens in production.
DEFAULT_SECRETS: Final[frozenset[str]] = frozenset(
    {"CHANGE_ME", "CHANGE_ME_JWT", "CHANGE_ME_JWT_REFRESH"}
)

load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Read a boolean flag; ``1/true/yes/y/on`` (any case) count as ``True``."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in TRUTHY


def env_int(name: str, default: int) -> int:
    """Read an integer, using ``default`` when unset or blank."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


class BaseConfig:
    """Settings shared by every environment.

    Session lifetimes
    -----------------
    JWT_ACCESS_TOKEN_EXPIRES:
        Access token lifetime, ``ACCESS_TOKEN_TTL_MINUTES`` (default 15).
    JWT_REFRESH_TOKEN_EXPIRES:
        Refresh token lifetime, ``REFRESH_TOKEN_TTL_DAYS`` (default 7).
    JWT_REFRESH_ROTATION:
        Return a new refresh token on every exchange and retire the presented
        one. Off by default.

    Secrets
    -------
    JWT_SECRET_KEY signs access tokens; JWT_REFRESH_SECRET_KEY signs refresh
    tokens. They must differ so one kind never verifies as the other.

    Admin-via-config
    ----------------
    ADMIN_EMAIL / ADMIN_PASSWORD / ADMIN_NAME feed ``flask seed admin``.
    """

    API_BASE_PREFIX = "/api"
    APP_VERSION = os.getenv("APP_VERSION", "dev")
    APP_COMMIT = os.getenv("APP_COMMIT", "unknown")

    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_JWT")
    JWT_REFRESH_SECRET_KEY = os.getenv("JWT_REFRESH_SECRET_KEY", "CHANGE_ME_JWT_REFRESH")
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_HEADER_NAME = "Authorization"
    JWT_HEADER_TYPE = "Bearer"
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=env_int("ACCESS_TOKEN_TTL_MINUTES", 15))
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=env_int("REFRESH_TOKEN_TTL_DAYS", 7))
    JWT_REFRESH_ROTATION = env_bool("JWT_REFRESH_ROTATION", False)

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Redis is optional: health check and, by default, rate-limit storage.
    REDIS_URL = os.getenv("REDIS_URL") or None
    RATELIMIT_ENABLED = env_bool("RATELIMIT_ENABLED", True)
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI") or REDIS_URL or "memory://"
    AUTH_LOGIN_RATE_LIMIT = os.getenv("AUTH_LOGIN_RATE_LIMIT", "5 per minute")

    ADMIN_EMAIL = os.getenv("ADMIN_EMAIL") or None
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD") or None
    ADMIN_NAME = os.getenv("ADMIN_NAME", "Administrator")

    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:5174")
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)

    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    DEBUG = env_bool("FLASK_DEBUG", True)
    CORS_MAX_AGE = 600


class TestingConfig(BaseConfig):
    """Hermetic settings: in-memory SQLite, no Redis, no rate limiting."""

    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = False
    REDIS_URL = None
    RATELIMIT_ENABLED = False
    RATELIMIT_STORAGE_URI = "memory://"
    JWT_SECRET_KEY = "test-access-secret"
    JWT_REFRESH_SECRET_KEY = "test-refresh-secret"
    JWT_REFRESH_ROTATION = False
    ADMIN_EMAIL = "admin@example.com"
    ADMIN_PASSWORD = "admin-secret1"
    USE_PROXYFIX = False


class ProductionConfig(BaseConfig):
    """Production defaults; secrets are checked by :func:`check_secrets` at startup."""

    SQLALCHEMY_ECHO = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Pick the config class named by ``APP_ENV`` (development when unset or unknown)."""
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)


def check_secrets(config: Mapping[str, Any]) -> None:
    """Refuse to start with placeholder or shared signing secrets.

    Skipped when ``DEBUG`` or ``TESTING`` is set.

    :raises RuntimeError: On a placeholder secret, or when the access and
        refresh signing keys are equal.
    """
    if config.get("DEBUG") or config.get("TESTING"):
        return
    keys = ("SECRET_KEY", "JWT_SECRET_KEY", "JWT_REFRESH_SECRET_KEY")
    placeholders = [key for key in keys if config.get(key) in DEFAULT_SECRETS]
    if placeholders:
        raise RuntimeError(f"Set real values for: {', '.join(placeholders)}")
    if config.get("JWT_SECRET_KEY") == config.get("JWT_REFRESH_SECRET_KEY"):
        raise RuntimeError("JWT_SECRET_KEY and JWT_REFRESH_SECRET_KEY must differ")
