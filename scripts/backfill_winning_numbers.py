"""Backfill cached winning numbers for recent drawings.

Meant to run on a schedule (e.g. daily at 06:00 America/New_York). Dates
already in the store are skipped; everything else goes through the same
lookup path the API uses.

Usage:
  python scripts/backfill_winning_numbers.py            # last 14 days
  python scripts/backfill_winning_numbers.py --days 30
  python scripts/backfill_winning_numbers.py --start 2025-01-01 --end 2025-01-31
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys
from collections.abc import Sequence
from datetime import date, timedelta

from dotenv import load_dotenv
from tqdm import tqdm

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from megacheck.clients.apify_client import ApifyResultsClient  # noqa: E402
from megacheck.config import get_config  # noqa: E402
from megacheck.db import build_store  # noqa: E402
from megacheck.services.draw_dates import draw_dates_in_range, parse_date  # noqa: E402
from megacheck.services.winning_numbers_service import WinningNumbersService  # noqa: E402


logger = logging.getLogger(__name__)


def _settings() -> dict[str, object]:
    cfg = get_config()
    return {k: getattr(cfg, k) for k in dir(cfg) if k.isupper()}


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Fetch missing winning numbers into the cache")
    parser.add_argument("--days", dest="days", type=int, default=14)
    parser.add_argument("--start", dest="start", type=str, default=None, help="YYYY-MM-DD")
    parser.add_argument("--end", dest="end", type=str, default=None, help="YYYY-MM-DD (default: today)")
    args = parser.parse_args(argv)

    load_dotenv()
    env_local = PROJECT_ROOT / ".env.local"
    if env_local.exists():
        load_dotenv(dotenv_path=env_local, override=True)

    settings = _settings()
    logging.basicConfig(
        level=getattr(logging, str(settings.get("LOG_LEVEL", "INFO")).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        end = parse_date(args.end) if args.end else date.today()
        start = parse_date(args.start) if args.start else end - timedelta(days=int(args.days))
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    if end < start:
        raise SystemExit(f"--end ({end}) must be >= --start ({start})")

    draw_dates = draw_dates_in_range(start.isoformat(), end.isoformat())
    if not draw_dates:
        logger.info("No draw dates in range %s..%s", start, end)
        return 0

    store, _resources = build_store(settings)
    fetcher = ApifyResultsClient(
        settings.get("APIFY_TOKEN"),  # type: ignore[arg-type]
        base_url=str(settings["APIFY_BASE_URL"]),
        actor_id=str(settings["APIFY_ACTOR_ID"]),
        timeout_seconds=float(settings["APIFY_TIMEOUT_SECONDS"]),  # type: ignore[arg-type]
        max_results=int(settings["APIFY_MAX_RESULTS"]),  # type: ignore[arg-type]
        retries=int(settings["APIFY_RETRIES"]),  # type: ignore[arg-type]
    )
    service = WinningNumbersService(store, fetcher)

    logger.info("Backfill range: %s..%s (%s draw dates)", start, end, len(draw_dates))
    summary = service.backfill(tqdm(draw_dates, desc="draws", unit="draw"))

    logger.info(
        "Backfill done fetched=%s skipped=%s failed=%s",
        len(summary.fetched),
        len(summary.skipped),
        len(summary.failed),
    )
    return 1 if summary.failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
