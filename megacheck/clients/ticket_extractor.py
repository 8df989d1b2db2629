"""Interface for turning a ticket photo into candidate plays and dates.

Extraction itself (OCR / vision model) lives outside this package.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from megacheck.services.draw_dates import reconcile_ticket_dates


@dataclass(frozen=True)
class ExtractedPlay:
    # Unreadable values come back as None.
    numbers: tuple[int | None, ...]
    mega_ball: int | None
    megaplier: int | None = None


@dataclass(frozen=True)
class ExtractedTicket:
    plays: tuple[ExtractedPlay, ...] = field(default_factory=tuple)
    draw_date: str | None = None
    ticket_date: str | None = None

    def resolved_draw_date(self) -> str | None:
        """Drawing date to check this ticket against, or None if neither date is usable."""

        return reconcile_ticket_dates(self.draw_date, self.ticket_date)


class TicketExtractor(Protocol):
    def extract(self, image: bytes) -> ExtractedTicket: ...
