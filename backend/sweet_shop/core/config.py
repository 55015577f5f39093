"""
Centralized configuration module for application-wide settings.

Values come from environment variables (optionally loaded from a ``.env``
file by the application factory). ``Settings.from_env()`` reads them once;
the resulting object is passed explicitly to everything that needs it.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///./sweet_shop.db"
DEV_JWT_SECRET = "dev-jwt-secret-change-me"
WEAK_SECRETS = ("dev-jwt-secret-change-me", "dev-secret-change-me", "secret123")
MIN_PRODUCTION_SECRET_LENGTH = 32


def _env_flag(name: str, default: str) -> bool:
    """Truthy values: "true", "1", "yes" (case-insensitive)."""
    return os.getenv(name, default).lower().strip() in ("true", "1", "yes")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(
            f"Invalid integer for {name}, falling back to {default}",
            extra={"context": {"variable": name, "value": raw}},
        )
        return default


@dataclass(frozen=True)
class Settings:
    """Runtime settings for one application instance."""

    environment: str = "development"
    database_url: str = DEFAULT_DATABASE_URL
    jwt_secret_key: str = DEV_JWT_SECRET
    jwt_expiration_hours: int = 24
    bcrypt_rounds: int = 12
    log_level: str = "DEBUG"
    log_to_file: bool = False
    log_json: bool = False
    sql_echo: bool = False
    slow_query_ms: int = 100
    sentry_dsn: Optional[str] = None
    port: int = 5000

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_testing(self) -> bool:
        return self.environment == "testing"

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from environment variables.

        Environment Variables:
            FLASK_ENV: development | production | testing (default development)
            DATABASE_URL: SQLAlchemy URL (default sqlite:///./sweet_shop.db)
            JWT_SECRET_KEY: token signing secret
            JWT_EXPIRATION_HOURS: token lifetime (default 24)
            BCRYPT_ROUNDS: bcrypt cost factor (default 12)
            LOG_LEVEL, LOG_TO_FILE, LOG_JSON, SQL_ECHO, SLOW_QUERY_MS
            SENTRY_DSN: enables Sentry error tracking when set
            PORT: development server port (default 5000)
        """
        environment = os.getenv("FLASK_ENV", "development").lower().strip()
        is_production = environment == "production"
        settings = cls(
            environment=environment,
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            jwt_secret_key=os.getenv("JWT_SECRET_KEY", DEV_JWT_SECRET),
            jwt_expiration_hours=_env_int("JWT_EXPIRATION_HOURS", 24),
            bcrypt_rounds=_env_int("BCRYPT_ROUNDS", 12),
            log_level=os.getenv("LOG_LEVEL", "INFO" if is_production else "DEBUG"),
            log_to_file=_env_flag("LOG_TO_FILE", "0"),
            log_json=_env_flag("LOG_JSON", "true" if is_production else "false"),
            sql_echo=_env_flag("SQL_ECHO", "false"),
            slow_query_ms=_env_int("SLOW_QUERY_MS", 100),
            sentry_dsn=os.getenv("SENTRY_DSN") or None,
            port=_env_int("PORT", 5000),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        """
        Fail fast on unsafe production configuration.

        Raises:
            ValueError: If production uses a weak or short JWT secret
        """
        if not self.is_production:
            return
        secret = self.jwt_secret_key
        if secret in WEAK_SECRETS or len(secret) < MIN_PRODUCTION_SECRET_LENGTH:
            raise ValueError(
                "Production deployment requires strong JWT_SECRET_KEY "
                f"(min {MIN_PRODUCTION_SECRET_LENGTH} chars). "
                "Set JWT_SECRET_KEY environment variable."
            )


def mask_url_password(url: str) -> str:
    """Hide the password part of a database URL before logging it."""
    import re

    return re.sub(r"(://[^:/?#]+):[^@]*@", r"\1:***@", url)
