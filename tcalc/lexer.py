"""Turn an expression string into an ordered list of tokens.

Grammar of a single token:

    operator  ::= "+" | "-"
    date      ::= NUMBER "/" NUMBER "/" NUMBER (WS clock)?
    clock     ::= NUMBER ":" NUMBER (":" NUMBER)?
    meridiem  ::= NUMBER ("am" | "pm")
    duration  ::= NUMBER UNIT
    keyword   ::= "today" | "tomorrow" | "yesterday" | "now"

A literal must be followed by whitespace, an operator, or the end of input.
"""

import logging
import re
from dataclasses import dataclass

from tcalc.errors import LexError
from tcalc.util import HOURS_PER_HALF_DAY
from tcalc.values import (
    Date,
    DateTime,
    Duration,
    Keyword,
    Operator,
    Time,
    Unit,
    Value,
)

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(
    r"""
    (?P<op>[+-])
    | (?:
        (?P<date>
            (?P<year>\d+)/(?P<month>\d+)/(?P<day>\d+)
            (?:\s+(?P<date_hour>\d+):(?P<date_minute>\d+)(?::(?P<date_second>\d+))?)?
        )
        | (?P<clock>(?P<hour>\d+):(?P<minute>\d+)(?::(?P<second>\d+))?)
        | (?P<meridiem>(?P<meridiem_hour>\d+)(?P<suffix>am|pm))
        | (?P<duration>(?P<amount>\d+)(?P<unit>[a-z]+))
        | (?P<word>[a-z]+)
    )(?=[\s+-]|\Z)
    """,
    re.VERBOSE | re.IGNORECASE | re.ASCII,
)
_WHITESPACE_RE = re.compile(r"\s+")
_CHUNK_RE = re.compile(r"[^\s+-]+")


@dataclass(frozen=True, kw_only=True)
class Token:
    position: int
    text: str


@dataclass(frozen=True, kw_only=True)
class OperatorToken(Token):
    op: Operator


@dataclass(frozen=True, kw_only=True)
class LiteralToken(Token):
    value: Value | Keyword


def tokenize(text: str) -> list[Token]:
    """Split an expression into operator and literal tokens.

    Raises:
        LexError: If any part of the input is not a recognizable token, or a
            literal has an out-of-range component (e.g. ``2023/02/30``).

    Example:
        >>> [t.text for t in tokenize("today-2h")]
        ['today', '-', '2h']
    """
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        space = _WHITESPACE_RE.match(text, pos)
        if space:
            pos = space.end()
            continue

        match = _TOKEN_RE.match(text, pos)
        if match is None:
            chunk = _CHUNK_RE.match(text, pos)
            garbled = chunk.group(0) if chunk else text[pos]
            raise LexError(
                f"unrecognized token '{garbled}'", text=garbled, position=pos
            )

        tokens.append(_to_token(match))
        pos = match.end()

    logger.debug("tokenized %r: %s", text, [t.text for t in tokens])
    return tokens


def _to_token(match: re.Match[str]) -> Token:
    text = match.group(0)
    position = match.start()

    if match.group("op"):
        return OperatorToken(position=position, text=text, op=Operator(text))

    try:
        value = _to_value(match)
    except ValueError as e:
        raise LexError(
            f"invalid literal '{text}': {e}", text=text, position=position
        ) from e
    return LiteralToken(position=position, text=text, value=value)


def _to_value(match: re.Match[str]) -> Value | Keyword:
    if match.group("date"):
        date = Date(
            year=int(match.group("year")),
            month=int(match.group("month")),
            day=int(match.group("day")),
        )
        if match.group("date_hour") is None:
            return date
        time = Time(
            hour=int(match.group("date_hour")),
            minute=int(match.group("date_minute")),
            second=int(match.group("date_second") or 0),
        )
        return DateTime(date=date, time=time)

    if match.group("clock"):
        return Time(
            hour=int(match.group("hour")),
            minute=int(match.group("minute")),
            second=int(match.group("second") or 0),
        )

    if match.group("meridiem"):
        return _meridiem_time(
            int(match.group("meridiem_hour")), match.group("suffix").lower()
        )

    if match.group("duration"):
        return Duration(
            amount=int(match.group("amount")), unit=Unit.parse(match.group("unit"))
        )

    word = match.group("word").lower()
    try:
        return Keyword(word)
    except ValueError:
        valid = ", ".join(k.value for k in Keyword)
        raise ValueError(f"unknown keyword (expected one of: {valid})") from None


def _meridiem_time(hour: int, suffix: str) -> Time:
    """Convert a 12-hour clock reading to a 24-hour Time.

    12am is midnight and 12pm is noon; hours outside 1-12 are rejected.
    """
    if not (1 <= hour <= HOURS_PER_HALF_DAY):
        raise ValueError(f"hour must be 1-12 with '{suffix}', got {hour}")
    hour %= HOURS_PER_HALF_DAY
    if suffix == "pm":
        hour += HOURS_PER_HALF_DAY
    return Time(hour=hour, minute=0)
