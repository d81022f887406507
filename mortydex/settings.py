"""Centralized configuration management for the Mortydex service."""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load a local .env before the settings singleton is created so that scripts
# importing this module observe the same environment as the API process.
load_dotenv()

# -- Application-wide constants -------------------------------------------------

DEFAULT_DIRECTORY_API_URL = "https://rickandmortyapi.com/graphql"
DEFAULT_DIRECTORY_TIMEOUT_SECONDS = 10.0
DEFAULT_SQLITE_DATABASE_URL = "sqlite+aiosqlite:///./data/app.db"
POSTGRES_ASYNC_PREFIX = "postgresql+psycopg://"
POSTGRES_SYNC_PREFIXES = ("postgres://", "postgresql://")
DEFAULT_FAVORITES_RATE_LIMIT_MS = 1000
DEFAULT_LOG_LEVEL = "INFO"


def _normalize_origin(origin: str) -> str:
    """Return the origin stripped of whitespace and trailing slashes."""

    return origin.strip().rstrip("/")


class AppSettings(BaseSettings):
    """Typed configuration surface built on top of ``pydantic-settings``.

    Besides the raw environment values the class exposes a few derived
    helpers (normalized database URL, numeric log level) so that consumers do
    not repeat parsing logic.
    """

    _explicit_database_url: bool = PrivateAttr(default=False)
    _explicit_cors_allow_origins: bool = PrivateAttr(default=False)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    def __init__(self, **values: object) -> None:
        """Capture explicit overrides prior to delegating to ``BaseSettings``."""

        normalized_keys = {str(key).lower() for key in values}
        super().__init__(**values)
        self._explicit_database_url = "database_url" in normalized_keys
        self._explicit_cors_allow_origins = (
            "cors_allow_origins_raw" in normalized_keys
            or "cors_allow_origins" in normalized_keys
        )
        database_env = os.getenv("DATABASE_URL")
        if database_env is not None and database_env.strip():
            self._explicit_database_url = True
        cors_env = os.getenv("CORS_ALLOW_ORIGINS")
        if cors_env is not None and cors_env.strip():
            self._explicit_cors_allow_origins = True

    directory_api_url: str = Field(
        default=DEFAULT_DIRECTORY_API_URL,
        alias="DIRECTORY_API_URL",
        description="GraphQL endpoint of the upstream character directory.",
    )
    directory_timeout_seconds: float = Field(
        default=DEFAULT_DIRECTORY_TIMEOUT_SECONDS,
        alias="DIRECTORY_TIMEOUT_SECONDS",
        gt=0,
        description="Total timeout applied to each upstream directory request.",
    )
    database_url: str | None = Field(
        default=None,
        alias="DATABASE_URL",
        description=(
            "SQLAlchemy-compatible URL for the favorites row store. Postgres URLs"
            " supplied in sync format (postgres:// or postgresql://) are coerced"
            " into the async psycopg driver string at runtime."
        ),
    )
    use_sqlite: bool = Field(
        default=False,
        alias="USE_SQLITE",
        description="Force the local SQLite store regardless of DATABASE_URL.",
    )
    favorites_rate_limit_ms: int = Field(
        default=DEFAULT_FAVORITES_RATE_LIMIT_MS,
        alias="FAVORITES_RATE_LIMIT_MS",
        ge=0,
        description="Cooldown between two favorite mutations on the same character.",
    )
    cors_allow_origins_raw: str | None = Field(
        default=None,
        alias="CORS_ALLOW_ORIGINS",
        description="Comma-separated list of additional CORS origins.",
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        alias="LOG_LEVEL",
        description="Root logging level (e.g. INFO, DEBUG, WARNING).",
    )

    @property
    def resolved_database_url(self) -> str:
        """Return the async-compatible database URL after applying fallbacks."""

        if self.use_sqlite or not self.database_url:
            return DEFAULT_SQLITE_DATABASE_URL

        url = self.database_url.strip()

        for prefix in POSTGRES_SYNC_PREFIXES:
            if url.startswith(prefix):
                return url.replace(prefix, POSTGRES_ASYNC_PREFIX, 1)

        if url.startswith(POSTGRES_ASYNC_PREFIX) or url.startswith("sqlite+aiosqlite"):
            return url

        raise RuntimeError(
            f"Expected a PostgreSQL or aiosqlite connection string, received: {url}"
        )

    @property
    def database_type(self) -> str:
        """Return ``sqlite`` when using SQLite otherwise ``postgresql``."""

        if self.resolved_database_url.startswith("sqlite"):
            return "sqlite"
        return "postgresql"

    @property
    def cors_allow_origins(self) -> list[str]:
        """Return normalised CORS origins supplied via environment variables."""

        if not self.cors_allow_origins_raw:
            return []

        origins = [
            _normalize_origin(origin)
            for origin in self.cors_allow_origins_raw.split(",")
            if origin.strip()
        ]
        return [origin for origin in origins if origin]

    @property
    def favorites_rate_limit_seconds(self) -> float:
        return self.favorites_rate_limit_ms / 1000.0

    @property
    def log_level_numeric(self) -> int:
        """Translate ``log_level`` into the numeric constant expected by logging."""

        candidate = logging.getLevelName(self.log_level.upper())
        if isinstance(candidate, int):
            return candidate
        return logging.INFO

    def optional_config_warnings(self) -> list[str]:
        """Return human-readable warnings for unset optional configuration."""

        warnings: list[str] = []

        if not self._explicit_database_url and not self.use_sqlite:
            warnings.append(
                "DATABASE_URL is not set - favorites are stored in the local SQLite "
                "file at ./data/app.db"
            )

        if not self._explicit_cors_allow_origins and not self.cors_allow_origins:
            warnings.append(
                "CORS_ALLOW_ORIGINS is not set - using default localhost origins only "
                "(may cause CORS issues in production)"
            )

        return warnings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached instance of :class:`AppSettings`."""

    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_DIRECTORY_API_URL",
    "DEFAULT_DIRECTORY_TIMEOUT_SECONDS",
    "DEFAULT_FAVORITES_RATE_LIMIT_MS",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_SQLITE_DATABASE_URL",
    "POSTGRES_ASYNC_PREFIX",
    "POSTGRES_SYNC_PREFIXES",
    "get_settings",
]
