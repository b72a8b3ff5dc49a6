import logging
from collections.abc import Callable, Iterable
from datetime import datetime

from tcalc.arithmetic import apply
from tcalc.errors import EvalError, ParseError
from tcalc.formatter import format_value
from tcalc.lexer import LiteralToken, OperatorToken, Token, tokenize
from tcalc.values import Date, DateTime, Keyword, Time, Value

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    """Read the local wall-clock time (naive, no time zone)."""
    return datetime.now()


def resolve(literal: Value | Keyword, clock: Clock) -> Value:
    """Return the value of a literal, reading the clock for keywords.

    Raises:
        EvalError: If a relative keyword lands outside the calendar, such as
            "tomorrow" on 9999/12/31.
    """
    if not isinstance(literal, Keyword):
        return literal

    current = clock()
    today = Date(year=current.year, month=current.month, day=current.day)
    if literal is Keyword.NOW:
        return DateTime(
            date=today,
            time=Time(
                hour=current.hour, minute=current.minute, second=current.second
            ),
        )
    offset = {Keyword.TODAY: 0, Keyword.TOMORROW: 1, Keyword.YESTERDAY: -1}[literal]
    try:
        return Date.from_days(today.to_days() + offset)
    except (OverflowError, ValueError) as e:
        raise EvalError(f"'{literal.value}' is out of range ({e})") from e


def _describe(token: Token | None) -> str:
    if token is None:
        return "end of input"
    if isinstance(token, OperatorToken):
        return f"operator '{token.text}'"
    return f"value '{token.text}'"


def fold(tokens: Iterable[Token], clock: Clock) -> Value:
    """Fold tokens left to right into a single value.

    The first token must be a literal. After that, tokens must alternate
    operator and literal; each pair is applied to the running result in
    order, with no precedence or reordering.

    Raises:
        ParseError: If tokens are out of order or an operator has no operand.
        EvalError: If an operator is applied to unsupported operands.
    """
    stream = iter(tokens)
    first = next(stream, None)
    if not isinstance(first, LiteralToken):
        raise ParseError(
            f"expression must start with a value, found {_describe(first)}",
            expected="value",
            found=_describe(first),
            position=first.position if first else 0,
        )

    acc = resolve(first.value, clock)
    logger.debug("start with %s", acc)

    for token in stream:
        if not isinstance(token, OperatorToken):
            raise ParseError(
                f"expected an operator, found {_describe(token)}",
                expected="operator",
                found=_describe(token),
                position=token.position,
            )

        operand = next(stream, None)
        if not isinstance(operand, LiteralToken):
            position = (
                operand.position
                if operand is not None
                else token.position + len(token.text)
            )
            raise ParseError(
                f"expected a value after '{token.text}', found {_describe(operand)}",
                expected="value",
                found=_describe(operand),
                position=position,
            )

        right = resolve(operand.value, clock)
        result = apply(acc, token.op, right)
        logger.debug("%s %s %s = %s", acc, token.op, right, result)
        acc = result

    return acc


def evaluate(text: str, now: datetime | None = None) -> Value:
    """Evaluate a date/time expression.

    Args:
        text: Expression such as ``"2023/12/25 - 7d"`` or ``"now + 90m"``
        now: Fixed clock reading used for ``today``, ``now`` and friends.
            When omitted the system clock is read each time a keyword is
            evaluated.

    Returns:
        The resulting Date, Time, DateTime or Duration

    Raises:
        LexError: If the text contains an invalid token
        ParseError: If the tokens are not value/operator/value...
        EvalError: If an operation is unsupported or overflows the calendar

    Example:
        >>> str(evaluate("2025/01/31 + 1month"))
        '2025/02/28'
    """
    clock: Clock = system_clock if now is None else (lambda: now)
    return fold(tokenize(text), clock)


def run(text: str, now: datetime | None = None) -> str:
    """Evaluate an expression and return its display string."""
    return format_value(evaluate(text, now))
