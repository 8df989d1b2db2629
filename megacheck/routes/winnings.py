"""Winnings routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from megacheck.clients.ticket_extractor import ExtractedTicket
from megacheck.errors import Failure
from megacheck.schemas.check import (
    CheckWinningsRequestSchema,
    DateQuerySchema,
    LookupResultSchema,
    MatchResultSchema,
    TicketDatesSchema,
)
from megacheck.services.check_service import CheckService
from megacheck.services.draw_dates import is_drawing_day, resolve_draw_date
from megacheck.services.winning_numbers_service import FOUND, WinningNumbersService
from megacheck.utils.responses import ok

winnings_bp = Blueprint("winnings", __name__)

_matches_schema = MatchResultSchema(many=True)
_lookup_schema = LookupResultSchema()
_date_query_schema = DateQuerySchema()
_ticket_dates_schema = TicketDatesSchema()


def _check_service() -> CheckService:
    return current_app.extensions["check_service"]


def _lookup_service() -> WinningNumbersService:
    return current_app.extensions["winning_numbers_service"]


@winnings_bp.post("/check-winnings")
def check_winnings():
    payload = request.get_json(silent=True) or {}
    data = CheckWinningsRequestSchema.for_rules(current_app.extensions["rules"]).load(payload)

    outcome = _check_service().check_winnings(data)
    if isinstance(outcome, Failure):
        raise outcome.to_error()

    lookup = outcome.lookup
    body = {
        "status": lookup.status,
        "drawDate": lookup.draw_date,
        "originalDate": lookup.original_date,
        "corrected": lookup.corrected,
    }
    if lookup.status != FOUND or lookup.winning is None:
        body["message"] = outcome.message
        return ok(body)

    winning = lookup.winning
    body.update(
        {
            "winningNumbers": list(winning.numbers),
            "winningMegaBall": winning.mega_ball,
            "megaplierValue": winning.multiplier,
            "matches": _matches_schema.dump(outcome.matches),
        }
    )
    return ok(body)


@winnings_bp.get("/winning-numbers/<draw_date>")
def get_winning_numbers(draw_date: str):
    _date_query_schema.load({"date": draw_date})

    outcome = _lookup_service().lookup(draw_date)
    if isinstance(outcome, Failure):
        raise outcome.to_error()

    return ok(_lookup_schema.dump(outcome))


@winnings_bp.get("/draw-date")
def get_draw_date():
    """Resolve ``?date=YYYY-MM-DD`` to its drawing date without any lookup."""

    data = _date_query_schema.load({"date": request.args.get("date", "")})
    input_date = str(data["date"])
    draw_date = resolve_draw_date(input_date)

    return ok(
        {
            "drawDate": draw_date,
            "originalDate": input_date,
            "corrected": draw_date != input_date,
            "isDrawingDay": is_drawing_day(input_date),
        }
    )


@winnings_bp.post("/tickets/draw-date")
def reconcile_ticket_draw_date():
    """Pick the drawing date from an extractor's drawing/purchase date guesses."""

    payload = request.get_json(silent=True) or {}
    data = _ticket_dates_schema.load(payload)
    ticket = ExtractedTicket(draw_date=data.get("draw_date"), ticket_date=data.get("ticket_date"))

    return ok({"drawDate": ticket.resolved_draw_date()})
