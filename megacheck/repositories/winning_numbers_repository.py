"""Repository layer for cached drawing results.

Both backends implement the same two-method store interface so the lookup
service never knows which one it talks to.
"""

from __future__ import annotations

from typing import Any, Protocol

from sqlalchemy.orm import Session, sessionmaker

from megacheck.models.winning_numbers import WinningNumbers
from megacheck.types import WinningCombination


class WinningCombinationStore(Protocol):
    def get(self, draw_date: str) -> WinningCombination | None: ...

    def put(self, draw_date: str, combo: WinningCombination) -> None: ...


class SqlWinningNumbersRepository:
    """Store backed by the ``winning_numbers`` table.

    Every call runs in its own short transaction.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    @staticmethod
    def _to_combination(row: WinningNumbers) -> WinningCombination:
        return WinningCombination(
            numbers=(
                int(row.number1),
                int(row.number2),
                int(row.number3),
                int(row.number4),
                int(row.number5),
            ),
            mega_ball=int(row.mega_ball),
            multiplier=int(row.multiplier or 1),
            draw_date=str(row.draw_date),
            fetched_at=row.fetched_at,
        )

    def get(self, draw_date: str) -> WinningCombination | None:
        with self._session_factory() as session:
            row = session.get(WinningNumbers, draw_date)
            if row is None:
                return None
            return self._to_combination(row)

    def put(self, draw_date: str, combo: WinningCombination) -> None:
        n = [int(x) for x in combo.numbers]
        with self._session_factory.begin() as session:
            session.merge(
                WinningNumbers(
                    draw_date=draw_date,
                    number1=n[0],
                    number2=n[1],
                    number3=n[2],
                    number4=n[3],
                    number5=n[4],
                    mega_ball=int(combo.mega_ball),
                    multiplier=int(combo.multiplier),
                    fetched_at=combo.fetched_at,
                )
            )


class MongoWinningNumbersRepository:
    """Store backed by a MongoDB collection keyed by ``draw_date``."""

    def __init__(self, collection: Any) -> None:
        self._col = collection

    def get(self, draw_date: str) -> WinningCombination | None:
        doc = self._col.find_one({"draw_date": draw_date}, {"_id": 0})
        if not doc:
            return None
        return WinningCombination.from_document(doc)

    def put(self, draw_date: str, combo: WinningCombination) -> None:
        doc = combo.to_document()
        doc["draw_date"] = draw_date
        self._col.update_one({"draw_date": draw_date}, {"$set": doc}, upsert=True)
