"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

# Load .env in development (no-op when the file is missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable, falling back to ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val)


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret used for session signing.
    JWT_SECRET_KEY: str
        HMAC key signing access and refresh tokens. Shared by the token codec
        and by ``flask-jwt-extended`` when it verifies access tokens.
    JWT_ACCESS_EXPIRATION_MINUTES: int
        Access token lifetime in minutes.
    JWT_REFRESH_EXPIRATION_DAYS: int
        Refresh token lifetime in days.
    TOKEN_STORE_BACKEND: str
        Where refresh tokens are persisted: ``"database"`` or ``"redis"``.
    REDIS_URL: str | None
        Redis connection string; required when ``TOKEN_STORE_BACKEND`` is
        ``"redis"``.
    TASK_QUERY_TIMEZONE: str
        IANA timezone used to expand ``dateFrom``/``dateTo`` into whole days.
    TASKS_DEFAULT_PAGE_SIZE: int
        Page size used when the client omits ``limit``.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.
    AUTH_RATE_LIMIT: str
        Flask-Limiter expression applied to login and registration.

    Notes
    -----
    Values are read once from environment variables at import time and
    handed to services explicitly by the application factory.
    """

    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_JWT")
    JWT_ALGORITHM = "HS256"
    JWT_ACCESS_EXPIRATION_MINUTES = env_int("JWT_ACCESS_EXPIRATION_MINUTES", 30)
    JWT_REFRESH_EXPIRATION_DAYS = env_int("JWT_REFRESH_EXPIRATION_DAYS", 30)

    # Refresh token persistence
    TOKEN_STORE_BACKEND = os.getenv("TOKEN_STORE_BACKEND", "database")
    REDIS_URL = os.getenv("REDIS_URL")

    # Task queries
    TASK_QUERY_TIMEZONE = os.getenv("TASK_QUERY_TIMEZONE", "UTC")
    TASKS_DEFAULT_PAGE_SIZE = env_int("TASKS_DEFAULT_PAGE_SIZE", 10)

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    # Rate limiting
    RATELIMIT_ENABLED = env_bool("RATELIMIT_ENABLED", True)
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    AUTH_RATE_LIMIT = os.getenv("AUTH_RATE_LIMIT", "10 per minute")

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and honors ``SQLALCHEMY_ECHO`` for verbose
    SQL logging when requested.
    """

    APP_ENV = "development"
    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables rate limiting.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Always stores refresh tokens in the database.
    """

    APP_ENV = "testing"
    TESTING = True
    DEBUG = False
    JWT_SECRET_KEY = "test-jwt-secret-with-enough-entropy-for-hs256"
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = True
    RATELIMIT_ENABLED = False
    TOKEN_STORE_BACKEND = "database"
    REDIS_URL = None


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled while relying on WSGI-level log
    configuration for noise control.
    """

    APP_ENV = "production"
    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
