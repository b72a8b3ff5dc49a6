"""Arithmetic between values, dispatched on (left kind, operator, right kind).

Every supported combination is an entry in ``RULES``; anything else is an
EvalError. Month and year shifts clamp the day to the end of the target month,
all other units are applied as a second count with carry.
"""

from typing import Any, Callable

from tcalc.calendar import add_days, add_months
from tcalc.errors import EvalError
from tcalc.util import MONTHS_PER_YEAR
from tcalc.values import (
    Date,
    DateTime,
    Duration,
    Kind,
    Operator,
    Time,
    Unit,
    Value,
)

Rule = Callable[[Any, Operator, Any], Value]


def _signed(op: Operator, duration: Duration) -> int:
    return duration.amount if op is Operator.ADD else -duration.amount


def _months(op: Operator, duration: Duration) -> int:
    scale = MONTHS_PER_YEAR if duration.unit is Unit.YEARS else 1
    return _signed(op, duration) * scale


def _shift_date(left: Date, op: Operator, right: Duration) -> Date | DateTime:
    if right.unit.is_calendar:
        year, month, day = add_months(
            left.year, left.month, left.day, _months(op, right)
        )
        return Date(year=year, month=month, day=day)
    if right.unit is Unit.DAYS:
        year, month, day = add_days(
            left.year, left.month, left.day, _signed(op, right)
        )
        return Date(year=year, month=month, day=day)
    # Sub-day units give the date a time of day, starting from midnight
    return _shift_datetime(DateTime(date=left), op, right)


def _shift_datetime(left: DateTime, op: Operator, right: Duration) -> DateTime:
    if right.unit.is_calendar:
        year, month, day = add_months(
            left.date.year, left.date.month, left.date.day, _months(op, right)
        )
        return DateTime(date=Date(year=year, month=month, day=day), time=left.time)
    return DateTime.from_seconds(
        left.to_seconds() + _signed(op, right) * right.unit.seconds
    )


def _shift_time(left: Time, op: Operator, right: Duration) -> Time:
    if not right.unit.is_clock:
        raise EvalError(
            f"a time of day cannot be shifted by {right.unit.value}",
            op=op,
            left=left.kind,
            right=right.kind,
        )
    return Time.from_seconds(
        left.to_seconds() + _signed(op, right) * right.unit.seconds
    )


def _difference(
    left: Date | DateTime, op: Operator, right: Date | DateTime
) -> Duration:
    """Subtract right from left.

    Two dates give whole days. Otherwise the result uses the coarsest of
    days/hours/minutes/seconds that represents the difference exactly.
    """
    if isinstance(left, Date) and isinstance(right, Date):
        return Duration(amount=left.to_days() - right.to_days(), unit=Unit.DAYS)

    seconds = _as_datetime(left).to_seconds() - _as_datetime(right).to_seconds()
    for unit in (Unit.DAYS, Unit.HOURS, Unit.MINUTES):
        if seconds % unit.seconds == 0:
            return Duration(amount=seconds // unit.seconds, unit=unit)
    return Duration(amount=seconds, unit=Unit.SECONDS)


def _as_datetime(value: Date | DateTime) -> DateTime:
    if isinstance(value, Date):
        return DateTime(date=value)
    return value


def _combine_durations(left: Duration, op: Operator, right: Duration) -> Duration:
    if left.unit is not right.unit:
        raise EvalError(
            f"mismatched duration units ({left.unit.value} and {right.unit.value})",
            op=op,
            left=left.kind,
            right=right.kind,
        )
    return Duration(amount=left.amount + _signed(op, right), unit=left.unit)


ADD, SUB = Operator.ADD, Operator.SUB

RULES: dict[tuple[Kind, Operator, Kind], Rule] = {
    (Kind.DATE, ADD, Kind.DURATION): _shift_date,
    (Kind.DATE, SUB, Kind.DURATION): _shift_date,
    (Kind.DATETIME, ADD, Kind.DURATION): _shift_datetime,
    (Kind.DATETIME, SUB, Kind.DURATION): _shift_datetime,
    (Kind.TIME, ADD, Kind.DURATION): _shift_time,
    (Kind.TIME, SUB, Kind.DURATION): _shift_time,
    (Kind.DATE, SUB, Kind.DATE): _difference,
    (Kind.DATE, SUB, Kind.DATETIME): _difference,
    (Kind.DATETIME, SUB, Kind.DATE): _difference,
    (Kind.DATETIME, SUB, Kind.DATETIME): _difference,
    (Kind.DURATION, ADD, Kind.DURATION): _combine_durations,
    (Kind.DURATION, SUB, Kind.DURATION): _combine_durations,
}


def apply(left: Value, op: Operator, right: Value) -> Value:
    """Apply ``left op right`` and return a new value.

    Raises:
        EvalError: If the combination is unsupported, or the result falls
            outside the representable calendar.
    """
    rule = RULES.get((left.kind, op, right.kind))
    if rule is None:
        raise EvalError(
            "unsupported operand combination",
            op=op,
            left=left.kind,
            right=right.kind,
        )
    try:
        return rule(left, op, right)
    except (OverflowError, ValueError) as e:
        raise EvalError(
            f"result out of range ({e})", op=op, left=left.kind, right=right.kind
        ) from e
