"""Cached official drawing results.

One row per drawing date. The five white balls are stored in separate
columns, ascending as reported by the results source.
"""

from __future__ import annotations

from sqlalchemy import SmallInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from megacheck.models.base import Base


class WinningNumbers(Base):
    """One row per drawing with 5 white balls + mega ball + multiplier."""

    __tablename__ = "winning_numbers"

    draw_date: Mapped[str] = mapped_column(String(10), primary_key=True)

    number1: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    number2: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    number3: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    number4: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    number5: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    mega_ball: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    multiplier: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=1)

    fetched_at: Mapped[str | None] = mapped_column(String(40), nullable=True)
