"""Game rules that changed between ticket schema versions.

Two presets exist:

- ``per_play``: each play carries its own multiplier value, mega ball 1..24.
- ``per_ticket``: the ticket carries a single yes/no multiplier flag and the
  drawing's announced multiplier applies, mega ball 1..25.

The lowest two prize tiers also differ between the presets.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MultiplierScope(str, Enum):
    PER_PLAY = "per_play"
    PER_TICKET = "per_ticket"


@dataclass(frozen=True)
class GameRules:
    """Numeric constants for one ticket schema."""

    name: str
    multiplier_scope: MultiplierScope
    mega_ball_max: int
    match_1_mb_amount: int
    mb_only_amount: int

    white_ball_min: int = 1
    white_ball_max: int = 70
    mega_ball_min: int = 1
    numbers_per_play: int = 5
    max_plays: int = 20
    multiplier_values: tuple[int, ...] = (2, 3, 4, 5, 10)


PER_PLAY_RULES = GameRules(
    name="per_play",
    multiplier_scope=MultiplierScope.PER_PLAY,
    mega_ball_max=24,
    match_1_mb_amount=4,
    mb_only_amount=2,
)

PER_TICKET_RULES = GameRules(
    name="per_ticket",
    multiplier_scope=MultiplierScope.PER_TICKET,
    mega_ball_max=25,
    match_1_mb_amount=7,
    mb_only_amount=5,
)

DEFAULT_RULES = PER_PLAY_RULES

_PRESETS = {r.name: r for r in (PER_PLAY_RULES, PER_TICKET_RULES)}


def get_rules(name: str | None) -> GameRules:
    """Resolve a preset by name (``PRIZE_SCHEMA`` setting)."""

    key = (name or DEFAULT_RULES.name).lower().strip()
    try:
        return _PRESETS[key]
    except KeyError as exc:
        raise ValueError(
            f"Unknown prize schema {name!r}; expected one of {', '.join(sorted(_PRESETS))}"
        ) from exc
