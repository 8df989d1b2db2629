"""Health check routes."""

from __future__ import annotations

from flask import Blueprint, current_app

from megacheck.db import get_db_backend
from megacheck.utils.responses import ok

health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health_check():
    """Health check endpoint."""

    return ok(
        {
            "status": "ok",
            "db_backend": get_db_backend(),
            "prize_schema": current_app.extensions["rules"].name,
        }
    )
