from __future__ import annotations

import unittest
from datetime import date

from fakes import DummyFetcher, DummyStore, combo

from megacheck.errors import ErrorKind, Failure, UpstreamError
from megacheck.services.winning_numbers_service import (
    FOUND,
    NOT_YET_DRAWN,
    LookupResult,
    WinningNumbersService,
)

TODAY = date(2025, 2, 3)  # Monday


def _service(store=None, fetcher=None) -> WinningNumbersService:
    return WinningNumbersService(store or DummyStore(), fetcher or DummyFetcher(), today_provider=lambda: TODAY)


class LookupTests(unittest.TestCase):
    def test_cache_hit_skips_fetch(self) -> None:
        store = DummyStore({"2025-01-31": combo("2025-01-31")})
        fetcher = DummyFetcher()
        result = _service(store, fetcher).lookup("2025-01-31")

        self.assertIsInstance(result, LookupResult)
        self.assertEqual(result.status, FOUND)
        self.assertEqual(result.draw_date, "2025-01-31")
        self.assertFalse(result.corrected)
        self.assertEqual(result.winning.numbers, (10, 20, 30, 40, 50))
        self.assertEqual(fetcher.calls, [])

    def test_cache_miss_fetches_and_stores(self) -> None:
        store = DummyStore()
        fetcher = DummyFetcher({"2025-01-31": [combo("2025-01-31")]})
        result = _service(store, fetcher).lookup("2025-01-29")

        self.assertEqual(result.status, FOUND)
        self.assertEqual(result.draw_date, "2025-01-31")
        self.assertEqual(result.original_date, "2025-01-29")
        self.assertTrue(result.corrected)
        self.assertEqual(fetcher.calls, ["2025-01-31"])
        self.assertEqual(store.puts, ["2025-01-31"])

    def test_first_result_wins(self) -> None:
        fetcher = DummyFetcher(
            {"2025-01-31": [combo("2025-01-31", mega_ball=1), combo("2025-01-31", mega_ball=2)]}
        )
        result = _service(fetcher=fetcher).lookup("2025-01-31")
        self.assertEqual(result.winning.mega_ball, 1)

    def test_future_draw_short_circuits(self) -> None:
        store = DummyStore()
        fetcher = DummyFetcher()
        result = _service(store, fetcher).lookup("2025-02-03")

        self.assertEqual(result.status, NOT_YET_DRAWN)
        self.assertEqual(result.draw_date, "2025-02-04")
        self.assertTrue(result.corrected)
        self.assertIsNone(result.winning)
        self.assertEqual(store.gets, [])
        self.assertEqual(fetcher.calls, [])

    def test_no_results_is_a_failure(self) -> None:
        result = _service(fetcher=DummyFetcher({})).lookup("2025-01-31")
        self.assertIsInstance(result, Failure)
        self.assertEqual(result.kind, ErrorKind.UPSTREAM_DATA_INVALID)
        self.assertIn("No draw found for 2025-01-31", result.message)

    def test_fetch_errors_come_back_as_values(self) -> None:
        for kind in ErrorKind:
            with self.subTest(kind=kind):
                store = DummyStore()
                fetcher = DummyFetcher(error=UpstreamError(kind, "boom"))
                result = _service(store, fetcher).lookup("2025-01-31")
                self.assertEqual(result, Failure(kind, "boom"))
                self.assertEqual(store.puts, [])

    def test_malformed_date(self) -> None:
        result = _service().lookup("01/31/2025")
        self.assertIsInstance(result, Failure)
        self.assertEqual(result.kind, ErrorKind.MALFORMED_INPUT)

    def test_idempotent(self) -> None:
        service = _service(fetcher=DummyFetcher({"2025-01-31": [combo("2025-01-31")]}))
        first = service.lookup("2025-01-30")
        second = service.lookup("2025-01-30")
        self.assertEqual(first, second)


class BackfillTests(unittest.TestCase):
    def test_skips_cached_and_collects_failures(self) -> None:
        store = DummyStore({"2025-01-28": combo("2025-01-28")})
        fetcher = DummyFetcher({"2025-01-31": [combo("2025-01-31")]})
        summary = _service(store, fetcher).backfill(["2025-01-28", "2025-01-31", "2025-01-24"])

        self.assertEqual(summary.skipped, ["2025-01-28"])
        self.assertEqual(summary.fetched, ["2025-01-31"])
        self.assertEqual(list(summary.failed), ["2025-01-24"])
        self.assertEqual(fetcher.calls, ["2025-01-31", "2025-01-24"])


if __name__ == "__main__":
    unittest.main()
