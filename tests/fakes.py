"""In-process stand-ins for the store and the results fetcher."""

from __future__ import annotations

from megacheck.errors import UpstreamError
from megacheck.types import WinningCombination


class DummyStore:
    def __init__(self, initial: dict[str, WinningCombination] | None = None) -> None:
        self.data: dict[str, WinningCombination] = dict(initial or {})
        self.gets: list[str] = []
        self.puts: list[str] = []

    def get(self, draw_date: str) -> WinningCombination | None:
        self.gets.append(draw_date)
        return self.data.get(draw_date)

    def put(self, draw_date: str, combo: WinningCombination) -> None:
        self.puts.append(draw_date)
        self.data[draw_date] = combo


class DummyFetcher:
    def __init__(
        self,
        results: dict[str, list[WinningCombination]] | None = None,
        error: UpstreamError | None = None,
    ) -> None:
        self.results = results or {}
        self.error = error
        self.calls: list[str] = []

    def fetch_for_date(self, draw_date: str) -> list[WinningCombination]:
        self.calls.append(draw_date)
        if self.error is not None:
            raise self.error
        return list(self.results.get(draw_date, []))


def combo(draw_date: str, numbers=(10, 20, 30, 40, 50), mega_ball: int = 15, multiplier: int = 3) -> WinningCombination:
    return WinningCombination(
        numbers=tuple(numbers),
        mega_ball=mega_ball,
        multiplier=multiplier,
        draw_date=draw_date,
        fetched_at="2025-02-01T00:00:00+00:00",
    )
