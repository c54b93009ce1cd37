"""Centralized configuration management for the fishlog service."""

from __future__ import annotations

import logging
import os
from datetime import date
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, PrivateAttr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables defined in a local .env file before instantiating the
# settings singleton so scripts and the API observe the same configuration.
load_dotenv()

# -- Application-wide constants -------------------------------------------------

DEFAULT_SQLITE_DATABASE_URL = "sqlite+aiosqlite:///./data/fishlog.db"
POSTGRES_ASYNC_PREFIX = "postgresql+psycopg://"
POSTGRES_SYNC_PREFIXES = ("postgres://", "postgresql://")
DEFAULT_REDIS_URL = "redis://localhost:6379/0"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_SEASON_START = "06-15"
DEFAULT_SEASON_END = "08-31"
DEFAULT_BEST_WEEKS_LIMIT = 3
DEFAULT_WEEK_LENGTH_DAYS = 7
DEFAULT_SPECIES = "Laks"

# Season boundaries are month/day pairs; this year only anchors them to real dates.
SEASON_TEMPLATE_YEAR = 2022


def parse_month_day(value: str) -> tuple[int, int]:
    """Parse an ``MM-DD`` (or ``MM.DD``) string into a ``(month, day)`` tuple."""

    cleaned = value.strip().replace(".", "-")
    try:
        month_part, day_part = cleaned.split("-")
        month, day = int(month_part), int(day_part)
        date(SEASON_TEMPLATE_YEAR, month, day)
    except ValueError as exc:
        raise ValueError(f"Expected a month-day value like '06-15', received: {value!r}") from exc
    return month, day


class AppSettings(BaseSettings):
    """Typed configuration surface built on top of ``pydantic-settings``.

    Besides the infrastructure URLs the settings carry the parameters of the
    statistics pipeline (season window, week length and how many best weeks
    are reported) so operators can retune them without code changes.
    """

    _explicit_redis_url: bool = PrivateAttr(default=False)
    _explicit_cors_allow_origins: bool = PrivateAttr(default=False)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    def __init__(self, **values: object) -> None:  # noqa: D401 - short override explanation
        """Capture explicit overrides prior to delegating to ``BaseSettings``."""

        normalized_keys = {str(key).lower() for key in values}
        super().__init__(**values)
        self._explicit_redis_url = "redis_url" in normalized_keys
        self._explicit_cors_allow_origins = (
            "cors_allow_origins_raw" in normalized_keys
            or "cors_allow_origins" in normalized_keys
        )
        redis_env = os.getenv("REDIS_URL")
        if redis_env is not None and redis_env.strip():
            self._explicit_redis_url = True
        cors_env = os.getenv("CORS_ALLOW_ORIGINS")
        if cors_env is not None and cors_env.strip():
            self._explicit_cors_allow_origins = True

    database_url: str | None = Field(
        default=None,
        alias="DATABASE_URL",
        description=(
            "Full SQLAlchemy-compatible database URL. Postgres URLs supplied in"
            " sync format (postgres:// or postgresql://) are coerced into the"
            " async psycopg driver string at runtime."
        ),
    )
    use_sqlite: bool = Field(
        default=False,
        alias="USE_SQLITE",
        description="Force SQLite usage regardless of DATABASE_URL.",
    )
    redis_url: str = Field(
        default=DEFAULT_REDIS_URL,
        alias="REDIS_URL",
        description="Redis connection string consumed by the statistics cache.",
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
    season_start: str = Field(
        default=DEFAULT_SEASON_START,
        alias="SEASON_START",
        description="First in-season day as MM-DD (inclusive).",
    )
    season_end: str = Field(
        default=DEFAULT_SEASON_END,
        alias="SEASON_END",
        description="Last in-season day as MM-DD (inclusive).",
    )
    best_weeks_limit: int = Field(
        default=DEFAULT_BEST_WEEKS_LIMIT,
        alias="BEST_WEEKS_LIMIT",
        ge=1,
        description="Number of top weeks reported by the best-weeks statistics.",
    )
    week_length_days: int = Field(
        default=DEFAULT_WEEK_LENGTH_DAYS,
        alias="WEEK_LENGTH_DAYS",
        ge=1,
        description="Number of season days bucketed into one week window.",
    )
    default_species: str = Field(
        default=DEFAULT_SPECIES,
        alias="DEFAULT_SPECIES",
        description="Species used by statistics endpoints when none is requested.",
    )

    @field_validator("season_start", "season_end")
    @classmethod
    def _validate_month_day(cls, value: str) -> str:
        parse_month_day(value)
        return value

    @model_validator(mode="after")
    def _validate_season_order(self) -> "AppSettings":
        if parse_month_day(self.season_start) > parse_month_day(self.season_end):
            raise ValueError(
                f"SEASON_START ({self.season_start}) must not be after SEASON_END ({self.season_end})"
            )
        return self

    @property
    def resolved_database_url(self) -> str:
        """Return the async-compatible database URL after applying fallbacks."""

        if self.use_sqlite or not self.database_url:
            return DEFAULT_SQLITE_DATABASE_URL

        url = self.database_url.strip()

        for prefix in POSTGRES_SYNC_PREFIXES:
            if url.startswith(prefix):
                return url.replace(prefix, POSTGRES_ASYNC_PREFIX, 1)

        if url.startswith(POSTGRES_ASYNC_PREFIX) or url.startswith("sqlite+aiosqlite://"):
            return url

        raise RuntimeError(
            f"Expected a PostgreSQL connection string or SQLite fallback, received: {url}"
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
            origin.strip().rstrip("/")
            for origin in self.cors_allow_origins_raw.split(",")
            if origin.strip()
        ]
        return [origin for origin in origins if origin]

    @property
    def season_bounds(self) -> tuple[tuple[int, int], tuple[int, int]]:
        """Return the season window as ``((month, day), (month, day))``."""

        return parse_month_day(self.season_start), parse_month_day(self.season_end)

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

        if not self._explicit_redis_url and self.redis_url == DEFAULT_REDIS_URL:
            warnings.append(
                "REDIS_URL is not set - statistics caching will use in-memory fallback "
                "(performance may be degraded)"
            )

        if not self._explicit_cors_allow_origins and not self.cors_allow_origins:
            warnings.append(
                "CORS_ALLOW_ORIGINS is not set - using default localhost origins only "
                "(may cause CORS issues in production)"
            )

        if self.database_type == "sqlite":
            warnings.append(
                "DATABASE_URL is not set - using the local SQLite database "
                f"({DEFAULT_SQLITE_DATABASE_URL})"
            )

        return warnings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached instance of :class:`AppSettings`."""

    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_BEST_WEEKS_LIMIT",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_REDIS_URL",
    "DEFAULT_SEASON_END",
    "DEFAULT_SEASON_START",
    "DEFAULT_SPECIES",
    "DEFAULT_SQLITE_DATABASE_URL",
    "DEFAULT_WEEK_LENGTH_DAYS",
    "POSTGRES_ASYNC_PREFIX",
    "POSTGRES_SYNC_PREFIXES",
    "SEASON_TEMPLATE_YEAR",
    "get_settings",
    "parse_month_day",
]
