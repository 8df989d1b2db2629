"""Client for the Apify actor that publishes past Mega Millions results."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Protocol

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from megacheck.errors import ErrorKind, UpstreamError
from megacheck.services.draw_dates import DATE_PATTERN
from megacheck.types import WinningCombination

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.apify.com/v2"
DEFAULT_ACTOR_ID = "harvest~mega-millions-lottery-past-winning-numbers"

# A single-day query returns one or two items; more means the date filter was ignored.
DEFAULT_MAX_RESULTS = 5

_NUMBER_SEPARATORS = re.compile(r"[-\s,]+")


class OfficialResultsFetcher(Protocol):
    def fetch_for_date(self, draw_date: str) -> list[WinningCombination]: ...


def _build_http_session(retries: int, backoff_factor: float) -> requests.Session:
    retry = Retry(
        total=retries,
        connect=retries,
        read=retries,
        status=retries,
        backoff_factor=backoff_factor,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("POST",),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)

    session = requests.Session()
    session.headers.update({"Content-Type": "application/json"})
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def _parse_int(value: Any) -> int | None:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def parse_draw_item(item: Any, draw_date: str, fetched_at: str | None = None) -> WinningCombination:
    """Turn one raw dataset item into a WinningCombination.

    Raises:
        UpstreamError: (UPSTREAM_DATA_INVALID) when the white balls do not
            split into exactly five integers or the mega ball is not numeric.
    """

    if not isinstance(item, dict):
        raise UpstreamError(
            ErrorKind.UPSTREAM_DATA_INVALID,
            f"Failed to parse Apify result for {draw_date}: got {item!r}",
        )

    raw_numbers = str(item.get("winningNumbers") or "")
    numbers = [n for n in (_parse_int(p) for p in _NUMBER_SEPARATORS.split(raw_numbers) if p) if n is not None]
    mega_ball = _parse_int(item.get("megaBall"))
    multiplier = _parse_int(item.get("megaplier")) or 1

    if len(numbers) != 5 or mega_ball is None:
        raise UpstreamError(
            ErrorKind.UPSTREAM_DATA_INVALID,
            f"Failed to parse Apify result for {draw_date}: got {item!r}",
            details={"item": item},
        )

    return WinningCombination(
        numbers=tuple(numbers),
        mega_ball=mega_ball,
        multiplier=multiplier,
        draw_date=draw_date,
        fetched_at=fetched_at,
    )


class ApifyResultsClient:
    """Runs the results actor synchronously for a single drawing date."""

    def __init__(
        self,
        token: str | None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        actor_id: str = DEFAULT_ACTOR_ID,
        timeout_seconds: float = 120.0,
        max_results: int = DEFAULT_MAX_RESULTS,
        retries: int = 0,
        backoff_factor: float = 0.5,
        session: requests.Session | None = None,
    ) -> None:
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._actor_id = actor_id
        self._timeout_seconds = timeout_seconds
        self._max_results = max_results
        self._http = session or _build_http_session(retries=retries, backoff_factor=backoff_factor)

    @property
    def url(self) -> str:
        return f"{self._base_url}/acts/{self._actor_id}/run-sync-get-dataset-items"

    def fetch_raw(self, draw_date: str) -> list[Any]:
        """POST the single-day query and return the raw dataset items."""

        if not self._token:
            raise UpstreamError(ErrorKind.CONFIGURATION_MISSING, "APIFY_TOKEN not set")

        if not isinstance(draw_date, str) or not DATE_PATTERN.match(draw_date):
            raise UpstreamError(
                ErrorKind.MALFORMED_INPUT,
                f'Invalid date format "{draw_date}", expected YYYY-MM-DD',
            )

        payload = {"startDate": draw_date, "endDate": draw_date}
        logger.info("Fetching winning numbers from Apify draw_date=%s", draw_date)

        try:
            resp = self._http.post(
                self.url,
                params={"token": self._token},
                json=payload,
                timeout=self._timeout_seconds,
            )
        except requests.RequestException as exc:
            logger.error("Apify network error draw_date=%s error=%s", draw_date, exc)
            raise UpstreamError(
                ErrorKind.UPSTREAM_UNAVAILABLE, f"Apify network error: {exc}"
            ) from exc

        if not resp.ok:
            logger.error("Apify API error status=%s body=%s", resp.status_code, resp.text)
            raise UpstreamError(
                ErrorKind.UPSTREAM_UNAVAILABLE,
                f"Apify API error ({resp.status_code}): {resp.text}",
                details={"status": resp.status_code},
            )

        try:
            data = resp.json()
        except ValueError as exc:
            logger.error("Apify returned invalid JSON draw_date=%s", draw_date)
            raise UpstreamError(ErrorKind.UPSTREAM_UNAVAILABLE, "Apify returned invalid JSON") from exc

        if not isinstance(data, list):
            logger.error("Apify returned unexpected format draw_date=%s data=%r", draw_date, data)
            raise UpstreamError(ErrorKind.UPSTREAM_UNAVAILABLE, "Apify returned unexpected format")

        if len(data) > self._max_results:
            logger.error(
                "Too many Apify results, date filter may have failed draw_date=%s count=%s",
                draw_date,
                len(data),
            )
            raise UpstreamError(
                ErrorKind.UPSTREAM_UNAVAILABLE,
                f"Apify returned {len(data)} results for a single-day query ({draw_date}). "
                "Aborting to prevent excessive usage.",
            )

        return data

    def fetch_for_date(self, draw_date: str) -> list[WinningCombination]:
        items = self.fetch_raw(draw_date)
        fetched_at = datetime.now(timezone.utc).isoformat()
        return [parse_draw_item(item, draw_date, fetched_at=fetched_at) for item in items]
