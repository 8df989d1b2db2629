"""Environment-based configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from sqlalchemy.engine import URL


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


def resolve_database_url() -> str:
    """Resolve DB connection string.

    Priority:
      1) DATABASE_URL (explicit)
      2) Build from PG* env vars
      3) Fallback to local sqlite
    """

    explicit = os.getenv("DATABASE_URL")
    if explicit:
        return explicit

    host = os.getenv("PGHOST")
    user = os.getenv("PGUSER")
    database = os.getenv("PGDATABASE")

    if host and user and database:
        url = URL.create(
            drivername="postgresql+psycopg2",
            username=user,
            password=os.getenv("PGPASSWORD"),
            host=host,
            port=_env_int("PGPORT", 5432),
            database=database,
            query={"sslmode": os.getenv("PGSSLMODE", "require")},
        )
        return url.render_as_string(hide_password=False)

    return "sqlite:///./megacheck.db"


@dataclass(frozen=True)
class BaseConfig:
    """Base configuration shared by all environments."""

    APP_ENV: str = os.getenv("APP_ENV", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # "sql" | "mongo"
    DB_BACKEND: str = (
        os.getenv("DB_BACKEND")
        or ("mongo" if os.getenv("MONGODB_URI") else "sql")
    ).lower().strip()

    DATABASE_URL: str = resolve_database_url()
    MONGODB_URI: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    MONGODB_DB: str = os.getenv("MONGODB_DB", "megacheck")

    # Official results source
    APIFY_TOKEN: str | None = os.getenv("APIFY_TOKEN")
    APIFY_BASE_URL: str = os.getenv("APIFY_BASE_URL", "https://api.apify.com/v2")
    APIFY_ACTOR_ID: str = os.getenv(
        "APIFY_ACTOR_ID", "harvest~mega-millions-lottery-past-winning-numbers"
    )
    APIFY_TIMEOUT_SECONDS: float = _env_float("APIFY_TIMEOUT_SECONDS", 120.0)
    APIFY_MAX_RESULTS: int = _env_int("APIFY_MAX_RESULTS", 5)
    APIFY_RETRIES: int = _env_int("APIFY_RETRIES", 0)

    # "per_play" | "per_ticket", see megacheck.rules
    PRIZE_SCHEMA: str = os.getenv("PRIZE_SCHEMA", "per_play")


@dataclass(frozen=True)
class DevelopmentConfig(BaseConfig):
    """Development configuration."""

    DEBUG: bool = True


@dataclass(frozen=True)
class ProductionConfig(BaseConfig):
    """Production configuration."""

    DEBUG: bool = False


@dataclass(frozen=True)
class TestingConfig(BaseConfig):
    """Test configuration: in-memory sqlite, no real token."""

    TESTING: bool = True
    DB_BACKEND: str = "sql"
    DATABASE_URL: str = "sqlite+pysqlite:///:memory:"
    APIFY_TOKEN: str | None = None


def get_config(env: str | None = None) -> type[BaseConfig]:
    """Resolve configuration class based on APP_ENV."""

    env = (env or os.getenv("APP_ENV", "development")).lower().strip()
    if env == "production":
        return ProductionConfig
    if env == "testing":
        return TestingConfig
    return DevelopmentConfig
