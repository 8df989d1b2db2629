from __future__ import annotations

import itertools
import unittest

from megacheck.rules import PER_PLAY_RULES, PER_TICKET_RULES
from megacheck.services.prize_service import (
    build_prize_table,
    evaluate,
    evaluate_plays,
    format_prize,
    lookup_tier,
)
from megacheck.types import Play, WinningCombination

WINNING = WinningCombination(
    numbers=(10, 20, 30, 40, 50),
    mega_ball=15,
    multiplier=3,
    draw_date="2025-01-31",
)


class PrizeTierTests(unittest.TestCase):
    def test_jackpot(self) -> None:
        result = evaluate([10, 20, 30, 40, 50], 15, WINNING)
        self.assertEqual(result.tier, "Jackpot")
        self.assertEqual(result.prize, "JACKPOT")
        self.assertEqual(result.prize_amount, 0)
        self.assertEqual(result.matched_numbers, (10, 20, 30, 40, 50))
        self.assertTrue(result.mega_ball_match)

    def test_jackpot_is_never_multiplied(self) -> None:
        result = evaluate([10, 20, 30, 40, 50], 15, WINNING, 5)
        self.assertEqual(result.tier, "Jackpot")
        self.assertEqual(result.prize, "JACKPOT")
        self.assertEqual(result.prize_amount, 0)

    def test_match_5(self) -> None:
        result = evaluate([10, 20, 30, 40, 50], 1, WINNING)
        self.assertEqual(result.tier, "Match 5")
        self.assertEqual(result.prize_amount, 1_000_000)
        self.assertEqual(result.prize, "$1,000,000")
        self.assertFalse(result.mega_ball_match)

    def test_match_5_with_multiplier(self) -> None:
        result = evaluate([10, 20, 30, 40, 50], 1, WINNING, 3)
        self.assertEqual(result.prize_amount, 3_000_000)
        self.assertEqual(result.prize, "$3,000,000")

    def test_every_tier_per_play_rules(self) -> None:
        cases = [
            ([10, 20, 30, 40, 99], 15, "Match 4+MB", 10_000),
            ([10, 20, 30, 40, 99], 1, "Match 4", 500),
            ([10, 20, 30, 88, 99], 15, "Match 3+MB", 200),
            ([10, 20, 30, 88, 99], 1, "Match 3", 10),
            ([10, 20, 77, 88, 99], 15, "Match 2+MB", 10),
            ([10, 66, 77, 88, 99], 15, "Match 1+MB", 4),
            ([1, 2, 3, 4, 5], 15, "MB Only", 2),
            ([10, 20, 3, 4, 5], 1, "No Prize", 0),
            ([10, 2, 3, 4, 5], 1, "No Prize", 0),
            ([1, 2, 3, 4, 5], 1, "No Prize", 0),
        ]
        for numbers, mega_ball, tier, amount in cases:
            with self.subTest(numbers=numbers, mega_ball=mega_ball):
                result = evaluate(numbers, mega_ball, WINNING, rules=PER_PLAY_RULES)
                self.assertEqual(result.tier, tier)
                self.assertEqual(result.prize_amount, amount)

    def test_lowest_tiers_follow_per_ticket_rules(self) -> None:
        one = evaluate([10, 66, 77, 88, 99], 15, WINNING, rules=PER_TICKET_RULES)
        mb_only = evaluate([1, 2, 3, 4, 5], 15, WINNING, rules=PER_TICKET_RULES)
        self.assertEqual((one.tier, one.prize_amount), ("Match 1+MB", 7))
        self.assertEqual((mb_only.tier, mb_only.prize_amount), ("MB Only", 5))

    def test_multiplier_scales_non_jackpot_tiers(self) -> None:
        table = build_prize_table(PER_PLAY_RULES)
        for multiplier in (2, 3, 4, 5, 10):
            for numbers, mega_ball in (
                ([10, 20, 30, 40, 99], 15),
                ([10, 20, 30, 40, 99], 1),
                ([10, 20, 30, 88, 99], 1),
                ([1, 2, 3, 4, 5], 15),
            ):
                with self.subTest(multiplier=multiplier, numbers=numbers, mega_ball=mega_ball):
                    plain = evaluate(numbers, mega_ball, WINNING, table=table)
                    boosted = evaluate(numbers, mega_ball, WINNING, multiplier, table=table)
                    self.assertEqual(boosted.tier, plain.tier)
                    self.assertEqual(boosted.prize_amount, plain.prize_amount * multiplier)

    def test_multiplier_does_not_affect_no_prize(self) -> None:
        result = evaluate([1, 2, 3, 4, 5], 1, WINNING, 5)
        self.assertEqual(result.tier, "No Prize")
        self.assertEqual(result.prize, "No Prize")
        self.assertEqual(result.prize_amount, 0)


class MatchDetailTests(unittest.TestCase):
    def test_order_of_play_numbers_does_not_matter(self) -> None:
        baseline = evaluate([10, 20, 30, 88, 99], 15, WINNING)
        for perm in itertools.permutations([99, 10, 88, 30, 20]):
            result = evaluate(list(perm), 15, WINNING)
            self.assertEqual(result.tier, baseline.tier)
            self.assertEqual(result.prize_amount, baseline.prize_amount)
            self.assertEqual(result.matched_numbers, baseline.matched_numbers)

    def test_matched_numbers_are_ascending_winning_values(self) -> None:
        winning = WinningCombination(numbers=(50, 10, 40, 20, 30), mega_ball=15, multiplier=1, draw_date="2025-01-31")
        result = evaluate([40, 55, 10, 66, 77], 1, winning)
        self.assertEqual(result.matched_numbers, (10, 40))

    def test_mega_ball_equal_to_white_ball_matches_independently(self) -> None:
        winning = WinningCombination(numbers=(10, 20, 30, 40, 50), mega_ball=10, multiplier=1, draw_date="2025-01-31")
        result = evaluate([10, 21, 31, 41, 51], 10, winning)
        self.assertEqual(result.matched_numbers, (10,))
        self.assertTrue(result.mega_ball_match)
        self.assertEqual(result.tier, "Match 1+MB")

    def test_play_is_echoed_and_index_defaults_to_zero(self) -> None:
        result = evaluate([10, 22, 33, 44, 55], 7, WINNING)
        self.assertEqual(result.play_index, 0)
        self.assertEqual(result.numbers, (10, 22, 33, 44, 55))
        self.assertEqual(result.mega_ball, 7)

    def test_evaluate_plays_assigns_positions(self) -> None:
        plays = [
            Play(numbers=(1, 2, 3, 4, 5), mega_ball=1),
            Play(numbers=(10, 20, 30, 40, 50), mega_ball=1, megaplier=2),
            Play(numbers=(10, 20, 30, 40, 50), mega_ball=15),
        ]
        results = evaluate_plays(plays, WINNING, [None, 2, None])
        self.assertEqual([r.play_index for r in results], [0, 1, 2])
        self.assertEqual([r.tier for r in results], ["No Prize", "Match 5", "Jackpot"])
        self.assertEqual(results[1].prize_amount, 2_000_000)

    def test_evaluate_plays_requires_aligned_multipliers(self) -> None:
        with self.assertRaises(ValueError):
            evaluate_plays([Play(numbers=(1, 2, 3, 4, 5), mega_ball=1)], WINNING, [])


class HelperTests(unittest.TestCase):
    def test_format_prize(self) -> None:
        self.assertEqual(format_prize("Jackpot", 0), "JACKPOT")
        self.assertEqual(format_prize("Match 3", 10), "$10")
        self.assertEqual(format_prize("Match 5", 3_000_000), "$3,000,000")
        self.assertEqual(format_prize("No Prize", 0), "No Prize")

    def test_lookup_tier_falls_back_to_no_prize(self) -> None:
        table = build_prize_table()
        self.assertEqual(lookup_tier(2, False, table), ("No Prize", 0))
        self.assertEqual(lookup_tier(0, False, table), ("No Prize", 0))
        self.assertEqual(lookup_tier(5, True, table), ("Jackpot", 0))

    def test_table_has_one_entry_per_combination(self) -> None:
        keys = [(t.white_matches, t.mega_ball_match) for t in build_prize_table()]
        self.assertEqual(len(keys), len(set(keys)))


if __name__ == "__main__":
    unittest.main()
