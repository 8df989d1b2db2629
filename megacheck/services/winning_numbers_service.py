"""Winning-number lookup: resolve the drawing date, then cache or fetch."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Iterable

from megacheck.clients.apify_client import OfficialResultsFetcher
from megacheck.errors import ErrorKind, Failure, UpstreamError
from megacheck.repositories.winning_numbers_repository import WinningCombinationStore
from megacheck.services.draw_dates import is_drawing_day, is_future_date, resolve_draw_date
from megacheck.types import WinningCombination

logger = logging.getLogger(__name__)

FOUND = "found"
NOT_YET_DRAWN = "not_yet_drawn"


@dataclass(frozen=True)
class LookupResult:
    status: str  # "found" | "not_yet_drawn"
    draw_date: str
    original_date: str
    corrected: bool
    winning: WinningCombination | None = None


@dataclass
class BackfillSummary:
    fetched: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)


class WinningNumbersService:
    """Find the official result for a ticket's drawing date.

    The store and fetcher are injected; the caller owns their lifecycle.
    """

    def __init__(
        self,
        store: WinningCombinationStore,
        fetcher: OfficialResultsFetcher,
        today_provider: Callable[[], date] | None = None,
    ) -> None:
        self._store = store
        self._fetcher = fetcher
        self._today = today_provider or date.today

    def lookup(self, input_date: str) -> LookupResult | Failure:
        """Resolve ``input_date`` and return the drawing's result.

        Future drawings return ``not_yet_drawn`` without touching the store
        or the fetcher. Upstream problems come back as a ``Failure`` value.
        """

        try:
            draw_date = input_date if is_drawing_day(input_date) else resolve_draw_date(input_date)
        except ValueError as exc:
            return Failure(ErrorKind.MALFORMED_INPUT, str(exc))

        corrected = draw_date != input_date
        if corrected:
            logger.info("Corrected to next draw date input_date=%s draw_date=%s", input_date, draw_date)

        if is_future_date(draw_date, today=self._today()):
            logger.info("Draw date is in the future draw_date=%s", draw_date)
            return LookupResult(
                status=NOT_YET_DRAWN,
                draw_date=draw_date,
                original_date=input_date,
                corrected=corrected,
            )

        cached = self._store.get(draw_date)
        if cached is not None:
            logger.info("Cache hit draw_date=%s", draw_date)
            return LookupResult(
                status=FOUND,
                draw_date=draw_date,
                original_date=input_date,
                corrected=corrected,
                winning=cached,
            )

        logger.info("Cache miss, fetching draw_date=%s", draw_date)
        try:
            results = self._fetcher.fetch_for_date(draw_date)
        except UpstreamError as exc:
            return Failure.from_error(exc)

        if not results:
            return Failure(
                ErrorKind.UPSTREAM_DATA_INVALID,
                f"No draw found for {draw_date}. Mega Millions draws are only on Tuesdays and Fridays.",
            )

        winning = results[0]
        self._store.put(draw_date, winning)
        logger.info("Cached winning numbers draw_date=%s", draw_date)

        return LookupResult(
            status=FOUND,
            draw_date=draw_date,
            original_date=input_date,
            corrected=corrected,
            winning=winning,
        )

    def backfill(self, draw_dates: Iterable[str]) -> BackfillSummary:
        """Populate the store for ``draw_dates``, skipping cached dates.

        One failing date does not stop the rest.
        """

        summary = BackfillSummary()
        for draw_date in draw_dates:
            if self._store.get(draw_date) is not None:
                summary.skipped.append(draw_date)
                continue

            outcome = self.lookup(draw_date)
            if isinstance(outcome, Failure):
                logger.error("Backfill failed draw_date=%s error=%s", draw_date, outcome.message)
                summary.failed[draw_date] = outcome.message
            elif outcome.status == FOUND:
                summary.fetched.append(draw_date)
            else:
                summary.skipped.append(draw_date)
        return summary
