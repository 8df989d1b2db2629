"""Mega Millions ticket checker: Flask application package."""

from __future__ import annotations

from datetime import date
from typing import Any, Callable

from flask import Flask

try:
    from dotenv import load_dotenv
except Exception:  # pragma: no cover
    load_dotenv = None  # type: ignore[assignment]


def create_app(
    config: Any | None = None,
    *,
    store: Any | None = None,
    fetcher: Any | None = None,
    today_provider: Callable[[], date] | None = None,
) -> Flask:
    """Application factory.

    Args:
        config: Config object/class; defaults to the one selected by APP_ENV.
        store: Winning-numbers store to use instead of the configured backend.
        fetcher: Official results fetcher to use instead of the Apify client.
        today_provider: Clock used to decide whether a drawing already happened.

    Returns:
        Configured Flask application.
    """
    if load_dotenv is not None:
        load_dotenv()

    from megacheck.clients.apify_client import ApifyResultsClient
    from megacheck.config import get_config
    from megacheck.db import init_db
    from megacheck.error_handlers import register_error_handlers
    from megacheck.logging_config import configure_logging
    from megacheck.routes.health import health_bp
    from megacheck.routes.winnings import winnings_bp
    from megacheck.rules import get_rules
    from megacheck.services.check_service import CheckService
    from megacheck.services.winning_numbers_service import WinningNumbersService

    app = Flask(__name__)
    app.config.from_object(config or get_config())

    configure_logging(app)
    if store is None:
        init_db(app)
    else:
        app.extensions["winning_numbers_store"] = store
    register_error_handlers(app)

    if fetcher is None:
        fetcher = ApifyResultsClient(
            app.config.get("APIFY_TOKEN"),
            base_url=str(app.config["APIFY_BASE_URL"]),
            actor_id=str(app.config["APIFY_ACTOR_ID"]),
            timeout_seconds=float(app.config["APIFY_TIMEOUT_SECONDS"]),
            max_results=int(app.config["APIFY_MAX_RESULTS"]),
            retries=int(app.config["APIFY_RETRIES"]),
        )

    rules = get_rules(app.config.get("PRIZE_SCHEMA"))
    lookup_service = WinningNumbersService(
        app.extensions["winning_numbers_store"],
        fetcher,
        today_provider=today_provider,
    )
    app.extensions["rules"] = rules
    app.extensions["winning_numbers_service"] = lookup_service
    app.extensions["check_service"] = CheckService(lookup_service, rules=rules)

    app.register_blueprint(health_bp)
    app.register_blueprint(winnings_bp, url_prefix="/api")

    return app
