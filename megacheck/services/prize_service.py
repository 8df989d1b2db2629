"""Prize determination for a single play against a drawing result."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from megacheck.rules import DEFAULT_RULES, GameRules
from megacheck.types import Play, WinningCombination

JACKPOT = "Jackpot"
NO_PRIZE = "No Prize"


@dataclass(frozen=True)
class PrizeTier:
    white_matches: int
    mega_ball_match: bool
    name: str
    base_amount: int


@dataclass(frozen=True)
class MatchResult:
    play_index: int
    numbers: tuple[int, ...]
    mega_ball: int
    matched_numbers: tuple[int, ...]
    mega_ball_match: bool
    tier: str
    prize: str
    prize_amount: int


def build_prize_table(rules: GameRules = DEFAULT_RULES) -> tuple[PrizeTier, ...]:
    """Ordered (white matches, mega ball match) -> tier table for ``rules``.

    The Jackpot amount is 0 because it is shown as "JACKPOT", not a dollar figure.
    """

    return (
        PrizeTier(5, True, JACKPOT, 0),
        PrizeTier(5, False, "Match 5", 1_000_000),
        PrizeTier(4, True, "Match 4+MB", 10_000),
        PrizeTier(4, False, "Match 4", 500),
        PrizeTier(3, True, "Match 3+MB", 200),
        PrizeTier(3, False, "Match 3", 10),
        PrizeTier(2, True, "Match 2+MB", 10),
        PrizeTier(1, True, "Match 1+MB", rules.match_1_mb_amount),
        PrizeTier(0, True, "MB Only", rules.mb_only_amount),
    )


def lookup_tier(
    white_matches: int, mega_ball_match: bool, table: Sequence[PrizeTier]
) -> tuple[str, int]:
    for tier in table:
        if tier.white_matches == white_matches and tier.mega_ball_match == mega_ball_match:
            return tier.name, tier.base_amount
    return NO_PRIZE, 0


def format_prize(tier: str, amount: int) -> str:
    if tier == JACKPOT:
        return "JACKPOT"
    if amount > 0:
        return f"${amount:,}"
    return NO_PRIZE


def evaluate(
    play_numbers: Iterable[int],
    play_mega_ball: int,
    winning: WinningCombination,
    multiplier: int | None = None,
    *,
    rules: GameRules = DEFAULT_RULES,
    play_index: int = 0,
    table: Sequence[PrizeTier] | None = None,
) -> MatchResult:
    """Evaluate one validated play.

    Args:
        play_numbers: The five white balls as played.
        play_mega_ball: The played mega ball.
        winning: Official result for the drawing.
        multiplier: Multiplier that applies to this play, or ``None`` when the
            player has none. Jackpot and "No Prize" are never multiplied.
        rules: Game rules used to build the prize table.
        play_index: Position of the play on its ticket.
        table: Prebuilt prize table, to skip rebuilding it per play.

    Returns:
        MatchResult with the matched white balls (ascending), tier and prize.
    """

    numbers = tuple(int(n) for n in play_numbers)
    played = set(numbers)
    matched = tuple(sorted(int(n) for n in winning.numbers if int(n) in played))
    mega_ball_match = int(play_mega_ball) == int(winning.mega_ball)

    tier, amount = lookup_tier(len(matched), mega_ball_match, table or build_prize_table(rules))

    if multiplier is not None and amount > 0 and tier != JACKPOT:
        amount *= int(multiplier)

    return MatchResult(
        play_index=int(play_index),
        numbers=numbers,
        mega_ball=int(play_mega_ball),
        matched_numbers=matched,
        mega_ball_match=mega_ball_match,
        tier=tier,
        prize=format_prize(tier, amount),
        prize_amount=amount,
    )


def evaluate_plays(
    plays: Sequence[Play],
    winning: WinningCombination,
    multipliers: Sequence[int | None],
    *,
    rules: GameRules = DEFAULT_RULES,
) -> list[MatchResult]:
    """Evaluate a ticket's plays in order; ``play_index`` is each play's position."""

    if len(multipliers) != len(plays):
        raise ValueError("multipliers must align with plays")

    table = build_prize_table(rules)
    return [
        evaluate(
            play.numbers,
            play.mega_ball,
            winning,
            multiplier,
            rules=rules,
            play_index=i,
            table=table,
        )
        for i, (play, multiplier) in enumerate(zip(plays, multipliers))
    ]
