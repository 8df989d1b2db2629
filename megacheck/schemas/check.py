"""Schemas for the winnings check API."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from marshmallow import EXCLUDE, Schema, ValidationError, fields, post_load, validate

from megacheck.rules import DEFAULT_RULES, GameRules, MultiplierScope
from megacheck.services.draw_dates import DATE_PATTERN, is_valid_date
from megacheck.types import Play


def date_field(name: str, **kwargs) -> fields.String:  # type: ignore[no-untyped-def]
    def _calendar_date(value: str) -> None:
        # Shape errors are reported by the Regexp validator.
        if DATE_PATTERN.match(value) and not is_valid_date(value):
            raise ValidationError(f"{name} must be a real calendar date")

    return fields.String(
        validate=[
            validate.Regexp(DATE_PATTERN, error=f"{name} must be in YYYY-MM-DD format"),
            _calendar_date,
        ],
        **kwargs,
    )


@dataclass(frozen=True)
class CheckWinningsRequest:
    plays: tuple[Play, ...]
    draw_date: str
    ticket_megaplier: bool = False


def _distinct_white_balls(numbers: list[int]) -> None:
    if len(set(numbers)) != len(numbers):
        raise ValidationError("Duplicate white ball numbers are not allowed")


def _each(validator: validate.Validator):  # type: ignore[no-untyped-def]
    # Applied at list level so the count and duplicate checks still run beside it.
    def _validate_items(values: list) -> None:
        for value in values:
            validator(value)

    return _validate_items


class PlaySchema(Schema):
    """Base for one play. Fields are added by ``play_schema_for`` from the game rules."""

    class Meta:
        unknown = EXCLUDE


@lru_cache(maxsize=None)
def play_schema_for(rules: GameRules) -> type[Schema]:
    play_fields: dict[str, fields.Field] = {
        "numbers": fields.List(
            fields.Integer(strict=True),
            required=True,
            validate=[
                validate.Length(equal=rules.numbers_per_play, error="Each play must have exactly {equal} numbers"),
                _each(
                    validate.Range(
                        min=rules.white_ball_min,
                        max=rules.white_ball_max,
                        error="White ball must be between {min} and {max}",
                    )
                ),
                _distinct_white_balls,
            ],
        ),
        "mega_ball": fields.Integer(
            data_key="megaBall",
            strict=True,
            required=True,
            validate=validate.Range(
                min=rules.mega_ball_min,
                max=rules.mega_ball_max,
                error="Mega Ball must be between {min} and {max}",
            ),
        ),
    }
    # Under the ticket-level schema a per-play value is ignored.
    if rules.multiplier_scope == MultiplierScope.PER_PLAY:
        play_fields["megaplier"] = fields.Integer(
            strict=True,
            required=False,
            load_default=None,
            allow_none=True,
            validate=validate.OneOf(rules.multiplier_values, error="Megaplier must be one of {choices}"),
        )
    return PlaySchema.from_dict(play_fields, name=f"PlaySchema[{rules.name}]")


def plays_field(rules: GameRules) -> fields.List:
    return fields.List(
        fields.Nested(play_schema_for(rules)),
        required=True,
        validate=[
            validate.Length(min=1, error="At least one play is required"),
            validate.Length(max=rules.max_plays, error="Maximum {max} plays per ticket"),
        ],
    )


class CheckWinningsRequestSchema(Schema):
    """Ticket check request. Use ``for_rules`` to validate against a non-default game."""

    plays = plays_field(DEFAULT_RULES)
    draw_date = date_field("drawDate", data_key="drawDate", required=True)

    # Ticket-level multiplier flag, used by the per_ticket schema only.
    megaplier = fields.Boolean(required=False, load_default=False, allow_none=True)

    @classmethod
    def for_rules(cls, rules: GameRules) -> "CheckWinningsRequestSchema":
        return _request_schema_class(rules)()

    @post_load
    def _make_request(self, data, **kwargs) -> CheckWinningsRequest:  # type: ignore[no-untyped-def]
        plays = tuple(
            Play(
                numbers=tuple(int(n) for n in p["numbers"]),
                mega_ball=int(p["mega_ball"]),
                megaplier=int(p["megaplier"]) if p.get("megaplier") is not None else None,
            )
            for p in data["plays"]
        )
        return CheckWinningsRequest(
            plays=plays,
            draw_date=str(data["draw_date"]),
            ticket_megaplier=bool(data.get("megaplier")),
        )


@lru_cache(maxsize=None)
def _request_schema_class(rules: GameRules) -> type[CheckWinningsRequestSchema]:
    if rules == DEFAULT_RULES:
        return CheckWinningsRequestSchema
    return CheckWinningsRequestSchema.from_dict(  # type: ignore[return-value]
        {"plays": plays_field(rules)}, name=f"CheckWinningsRequestSchema[{rules.name}]"
    )


class DateQuerySchema(Schema):
    date = date_field("date", required=True)


class TicketDatesSchema(Schema):
    """Dates guessed by a ticket extractor; either may be missing or garbled."""

    class Meta:
        unknown = EXCLUDE

    draw_date = fields.String(data_key="drawDate", load_default=None, allow_none=True)
    ticket_date = fields.String(data_key="ticketDate", load_default=None, allow_none=True)


class MatchResultSchema(Schema):
    play_index = fields.Integer(data_key="playIndex")
    numbers = fields.List(fields.Integer())
    mega_ball = fields.Integer(data_key="megaBall")
    matched_numbers = fields.List(fields.Integer(), data_key="matchedNumbers")
    mega_ball_match = fields.Boolean(data_key="megaBallMatch")
    tier = fields.String()
    prize = fields.String()
    prize_amount = fields.Integer(data_key="prizeAmount")


class WinningCombinationSchema(Schema):
    numbers = fields.List(fields.Integer())
    mega_ball = fields.Integer(data_key="megaBall")
    multiplier = fields.Integer(data_key="megaplier")
    draw_date = fields.String(data_key="drawDate")
    fetched_at = fields.String(data_key="fetchedAt", allow_none=True)


class LookupResultSchema(Schema):
    status = fields.String()
    draw_date = fields.String(data_key="drawDate")
    original_date = fields.String(data_key="originalDate")
    corrected = fields.Boolean()
    winning = fields.Nested(WinningCombinationSchema, data_key="winningNumbers", allow_none=True)
