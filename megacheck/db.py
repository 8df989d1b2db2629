"""Database engine / client setup and winning-numbers store construction.

The app owns the engine (or Mongo client) and the store built on top of
it; nothing here is a module-level global.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from flask import Flask, current_app
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from megacheck.models.base import Base
from megacheck.repositories.winning_numbers_repository import (
    MongoWinningNumbersRepository,
    SqlWinningNumbersRepository,
    WinningCombinationStore,
)

logger = logging.getLogger(__name__)

WINNING_NUMBERS_COLLECTION = "winning_numbers"


def create_app_engine(database_url: str) -> Engine:
    url = make_url(database_url)

    # In-memory sqlite must share one connection or every session sees an empty db.
    if url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            future=True,
        )

    return create_engine(database_url, pool_pre_ping=True, future=True)


def create_mongo_db(uri: str, db_name: str) -> Any:
    from pymongo import MongoClient

    client = MongoClient(uri)
    return client[db_name]


def build_store(settings: Mapping[str, Any]) -> tuple[WinningCombinationStore, dict[str, Any]]:
    """Build the configured store.

    Returns:
        The store plus the underlying resources (engine / mongo db) so the
        owner can keep and close them.
    """

    backend = str(settings.get("DB_BACKEND") or "sql").lower().strip()
    if backend == "mongo":
        db = create_mongo_db(str(settings["MONGODB_URI"]), str(settings["MONGODB_DB"]))
        col = db[WINNING_NUMBERS_COLLECTION]
        col.create_index("draw_date", unique=True)
        return MongoWinningNumbersRepository(col), {"mongo_db": db}

    if backend != "sql":
        raise ValueError(f"Unsupported DB_BACKEND {backend!r}; expected 'sql' or 'mongo'")

    engine = create_app_engine(str(settings["DATABASE_URL"]))
    # Create tables for the cache (production would use migrations).
    Base.metadata.create_all(bind=engine)
    session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    return SqlWinningNumbersRepository(session_factory), {
        "engine": engine,
        "session_factory": session_factory,
    }


def init_db(app: Flask) -> None:
    """Create the winning-numbers store and attach it to the app."""

    store, resources = build_store(app.config)
    app.extensions.update(resources)
    app.extensions["winning_numbers_store"] = store
    logger.info("Winning numbers store ready backend=%s", app.config.get("DB_BACKEND"))


def get_db_backend() -> str:
    return str(current_app.config.get("DB_BACKEND") or "sql").lower().strip()
