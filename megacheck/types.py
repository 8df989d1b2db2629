"""Plain value objects shared by services, repositories and clients."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Play:
    """One line on a ticket: five white balls and a mega ball."""

    numbers: tuple[int, ...]
    mega_ball: int
    megaplier: int | None = None


@dataclass(frozen=True)
class WinningCombination:
    """Official result of one drawing."""

    numbers: tuple[int, ...]
    mega_ball: int
    multiplier: int
    draw_date: str
    fetched_at: str | None = None

    def to_document(self) -> dict[str, Any]:
        return {
            "draw_date": self.draw_date,
            "numbers": [int(n) for n in self.numbers],
            "mega_ball": int(self.mega_ball),
            "multiplier": int(self.multiplier),
            "fetched_at": self.fetched_at,
        }

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "WinningCombination":
        return cls(
            numbers=tuple(int(n) for n in doc["numbers"]),
            mega_ball=int(doc["mega_ball"]),
            multiplier=int(doc.get("multiplier") or 1),
            draw_date=str(doc["draw_date"]),
            fetched_at=doc.get("fetched_at"),
        )
