"""Drawing-date arithmetic.

Drawings happen on Tuesdays and Fridays only. Dates travel as ``YYYY-MM-DD``
strings and are handled as naive calendar dates, so local UTC offsets never
shift the weekday.
"""

from __future__ import annotations

import re
from datetime import date, timedelta

# date.weekday(): Monday=0 .. Sunday=6
TUESDAY = 1
FRIDAY = 4
DRAW_WEEKDAYS: tuple[int, ...] = (TUESDAY, FRIDAY)

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_date(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` string.

    Raises:
        ValueError: when the string has another shape or is not a calendar date.
    """

    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        raise ValueError(f"Invalid date format {value!r}, expected YYYY-MM-DD")
    return date.fromisoformat(value)


def is_valid_date(value: object) -> bool:
    try:
        parse_date(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return False
    return True


def is_drawing_day(date_str: str) -> bool:
    return parse_date(date_str).weekday() in DRAW_WEEKDAYS


def resolve_draw_date(date_str: str) -> str:
    """Return the drawing date on or after ``date_str``.

    A drawing day is returned unchanged. Any other day moves forward to
    the closest Tuesday or Friday; the search never goes backwards.
    """

    d = parse_date(date_str)
    dow = d.weekday()
    if dow in DRAW_WEEKDAYS:
        return date_str

    days_ahead = min((draw_day - dow) % 7 for draw_day in DRAW_WEEKDAYS)
    return (d + timedelta(days=days_ahead)).isoformat()


def is_future_date(date_str: str, today: date | None = None) -> bool:
    """True when ``date_str`` is strictly after today's local calendar day."""

    current = today or date.today()
    return parse_date(date_str) > current


def draw_dates_in_range(start: str, end: str) -> list[str]:
    """All drawing dates between ``start`` and ``end`` inclusive, ascending."""

    first = parse_date(start)
    last = parse_date(end)
    if last < first:
        return []

    out: list[str] = []
    current = parse_date(resolve_draw_date(start))
    while current <= last:
        out.append(current.isoformat())
        current = parse_date(resolve_draw_date((current + timedelta(days=1)).isoformat()))
    return out


def reconcile_ticket_dates(draw_date_guess: str | None, purchase_date_guess: str | None) -> str | None:
    """Pick the drawing date for a scanned ticket.

    The printed drawing date wins when it parses; otherwise the purchase
    date is used. Either one is moved forward to a drawing day if needed.
    """

    for guess in (draw_date_guess, purchase_date_guess):
        if guess and is_valid_date(guess):
            if is_drawing_day(guess):
                return guess
            return resolve_draw_date(guess)
    return None
