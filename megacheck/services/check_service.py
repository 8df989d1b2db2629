"""Check a validated ticket against the official result for its drawing."""

from __future__ import annotations

from dataclasses import dataclass, field

from megacheck.errors import Failure
from megacheck.rules import DEFAULT_RULES, GameRules, MultiplierScope
from megacheck.schemas.check import CheckWinningsRequest
from megacheck.services.prize_service import MatchResult, evaluate_plays
from megacheck.services.winning_numbers_service import (
    NOT_YET_DRAWN,
    LookupResult,
    WinningNumbersService,
)
from megacheck.types import WinningCombination


@dataclass(frozen=True)
class CheckWinningsResult:
    lookup: LookupResult
    matches: list[MatchResult] = field(default_factory=list)

    @property
    def message(self) -> str | None:
        if self.lookup.status == NOT_YET_DRAWN:
            return f"Draw on {self.lookup.draw_date} hasn't happened yet."
        return None


def resolve_multipliers(
    request: CheckWinningsRequest, winning: WinningCombination, rules: GameRules
) -> list[int | None]:
    """Multiplier per play, ``None`` where no multiplier applies."""

    if rules.multiplier_scope == MultiplierScope.PER_PLAY:
        return [play.megaplier for play in request.plays]
    if request.ticket_megaplier:
        return [int(winning.multiplier)] * len(request.plays)
    return [None] * len(request.plays)


class CheckService:
    def __init__(self, lookup_service: WinningNumbersService, rules: GameRules = DEFAULT_RULES) -> None:
        self._lookup = lookup_service
        self._rules = rules

    def check_winnings(self, request: CheckWinningsRequest) -> CheckWinningsResult | Failure:
        outcome = self._lookup.lookup(request.draw_date)
        if isinstance(outcome, Failure):
            return outcome

        if outcome.status == NOT_YET_DRAWN or outcome.winning is None:
            return CheckWinningsResult(lookup=outcome)

        winning = outcome.winning
        matches = evaluate_plays(
            request.plays,
            winning,
            resolve_multipliers(request, winning, self._rules),
            rules=self._rules,
        )
        return CheckWinningsResult(lookup=outcome, matches=matches)
