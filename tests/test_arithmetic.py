"""Tests for the arithmetic rule table."""

from dataclasses import FrozenInstanceError
from itertools import product

import pytest

from tcalc import Date, DateTime, Duration, EvalError, Kind, Operator, Time, Unit
from tcalc.arithmetic import RULES, apply

ADD, SUB = Operator.ADD, Operator.SUB


def d(year, month, day):
    return Date(year=year, month=month, day=day)


def dt(year, month, day, hour=0, minute=0, second=0):
    return DateTime(
        date=d(year, month, day), time=Time(hour=hour, minute=minute, second=second)
    )


def dur(amount, unit):
    return Duration(amount=amount, unit=unit)


def test_date_minus_days():
    """Test subtracting whole days from a date."""
    assert apply(d(2023, 12, 25), SUB, dur(7, Unit.DAYS)) == d(2023, 12, 18)


def test_date_plus_days_crosses_leap_day():
    """Test day carry through February in leap and non-leap years."""
    assert apply(d(2024, 2, 28), ADD, dur(1, Unit.DAYS)) == d(2024, 2, 29)
    assert apply(d(2023, 2, 28), ADD, dur(1, Unit.DAYS)) == d(2023, 3, 1)
    assert apply(d(2100, 2, 28), ADD, dur(1, Unit.DAYS)) == d(2100, 3, 1)
    assert apply(d(2023, 12, 31), ADD, dur(366, Unit.DAYS)) == d(2024, 12, 31)


def test_date_plus_month_clamps():
    """Test that month shifts clamp to the end of a shorter month."""
    assert apply(d(2025, 1, 31), ADD, dur(1, Unit.MONTHS)) == d(2025, 2, 28)
    assert apply(d(2024, 3, 31), SUB, dur(1, Unit.MONTHS)) == d(2024, 2, 29)


def test_date_plus_year_from_leap_day():
    """Test that Feb 29 plus a year lands on Feb 28."""
    assert apply(d(2024, 2, 29), ADD, dur(1, Unit.YEARS)) == d(2025, 2, 28)
    assert apply(d(2024, 2, 29), ADD, dur(4, Unit.YEARS)) == d(2028, 2, 29)


def test_date_with_clock_units_becomes_datetime():
    """Test that hours/minutes/seconds give a date a time of day."""
    assert apply(d(2023, 12, 25), ADD, dur(2, Unit.HOURS)) == dt(2023, 12, 25, 2)
    assert apply(d(2023, 12, 25), SUB, dur(2, Unit.HOURS)) == dt(2023, 12, 24, 22)
    assert apply(d(2023, 12, 25), ADD, dur(90, Unit.SECONDS)) == dt(
        2023, 12, 25, 0, 1, 30
    )


def test_datetime_carry_across_year():
    """Test minute carry rolling over into a new year."""
    result = apply(dt(2023, 12, 31, 23, 30), ADD, dur(45, Unit.MINUTES))
    assert result == dt(2024, 1, 1, 0, 15)


def test_datetime_plus_month_keeps_time():
    """Test that month shifts keep the time of day."""
    result = apply(dt(2025, 1, 31, 14, 30), ADD, dur(1, Unit.MONTHS))
    assert result == dt(2025, 2, 28, 14, 30)


def test_datetime_minus_days():
    """Test that day shifts on a DateTime stay a DateTime."""
    result = apply(dt(2025, 3, 1, 8), SUB, dur(1, Unit.DAYS))
    assert result == dt(2025, 2, 28, 8)


def test_time_wraps_around_midnight():
    """Test that times wrap modulo 24 hours without gaining a date."""
    assert apply(Time(hour=14, minute=0), ADD, dur(12, Unit.HOURS)) == Time(
        hour=2, minute=0
    )
    assert apply(Time(hour=0, minute=30), SUB, dur(45, Unit.MINUTES)) == Time(
        hour=23, minute=45
    )
    assert apply(Time(hour=2, minute=0), ADD, dur(30, Unit.MINUTES)) == Time(
        hour=2, minute=30
    )


@pytest.mark.parametrize("unit", [Unit.DAYS, Unit.MONTHS, Unit.YEARS])
def test_time_rejects_calendar_units(unit):
    """Test that a time of day cannot be shifted by days or longer."""
    with pytest.raises(EvalError, match=f"cannot be shifted by {unit.value}"):
        apply(Time(hour=2, minute=0), ADD, dur(1, unit))


def test_date_difference_in_days():
    """Test that subtracting dates gives signed whole days, left minus right."""
    assert apply(d(2025, 12, 25), SUB, d(2025, 12, 18)) == dur(7, Unit.DAYS)
    assert apply(d(2025, 12, 18), SUB, d(2025, 12, 25)) == dur(-7, Unit.DAYS)
    assert apply(d(2025, 3, 1), SUB, d(2024, 3, 1)) == dur(365, Unit.DAYS)


@pytest.mark.parametrize(
    "left,right,expected",
    [
        (dt(2025, 1, 2, 12), d(2025, 1, 1), dur(36, Unit.HOURS)),
        (dt(2025, 1, 2), d(2025, 1, 1), dur(1, Unit.DAYS)),
        (dt(2025, 1, 1, 1, 30), dt(2025, 1, 1), dur(90, Unit.MINUTES)),
        (dt(2025, 1, 1, 0, 0, 30), d(2025, 1, 1), dur(30, Unit.SECONDS)),
        (d(2025, 1, 1), dt(2025, 1, 1, 6), dur(-6, Unit.HOURS)),
    ],
)
def test_datetime_difference_uses_coarsest_exact_unit(left, right, expected):
    """Test DateTime differences expressed in the coarsest exact unit."""
    assert apply(left, SUB, right) == expected


def test_duration_same_unit():
    """Test adding and subtracting durations that share a unit."""
    assert apply(dur(2, Unit.HOURS), ADD, dur(3, Unit.HOURS)) == dur(5, Unit.HOURS)
    assert apply(dur(1, Unit.DAYS), SUB, dur(3, Unit.DAYS)) == dur(-2, Unit.DAYS)


def test_duration_mismatched_units():
    """Test that durations are never converted between units."""
    with pytest.raises(EvalError, match="mismatched duration units"):
        apply(dur(1, Unit.DAYS), ADD, dur(1, Unit.HOURS))


def test_adding_dates_is_unsupported():
    """Test that Date + Date reports both kinds and the operator."""
    with pytest.raises(EvalError, match="unsupported operand combination") as exc_info:
        apply(d(2025, 9, 27), ADD, d(2025, 9, 28))

    assert exc_info.value.left is Kind.DATE
    assert exc_info.value.right is Kind.DATE
    assert exc_info.value.op is ADD
    assert str(exc_info.value) == "unsupported operand combination: Date + Date"


SAMPLES = {
    Kind.DATE: d(2025, 1, 1),
    Kind.TIME: Time(hour=12, minute=0),
    Kind.DATETIME: dt(2025, 1, 1, 12),
    Kind.DURATION: dur(1, Unit.HOURS),
}


@pytest.mark.parametrize("left,op,right", list(product(Kind, Operator, Kind)))
def test_rule_table_is_total(left, op, right):
    """Test that every kind/operator/kind triple either has a rule or fails."""
    if (left, op, right) in RULES:
        result = apply(SAMPLES[left], op, SAMPLES[right])
        assert result.kind in Kind
    else:
        with pytest.raises(EvalError, match="unsupported operand combination"):
            apply(SAMPLES[left], op, SAMPLES[right])


def test_unsupported_combinations():
    """Test the combinations the rule table deliberately leaves out."""
    assert (Kind.DATE, ADD, Kind.DATE) not in RULES
    assert (Kind.DATE, SUB, Kind.TIME) not in RULES
    assert (Kind.DURATION, ADD, Kind.DATE) not in RULES
    assert (Kind.TIME, SUB, Kind.TIME) not in RULES


@pytest.mark.parametrize(
    "left,op,right",
    [
        (d(9999, 12, 31), ADD, dur(1, Unit.DAYS)),
        (d(1, 1, 1), SUB, dur(1, Unit.MONTHS)),
        (dt(9999, 12, 31, 23, 59), ADD, dur(1, Unit.MINUTES)),
        (d(2025, 1, 1), ADD, dur(10**20, Unit.YEARS)),
    ],
)
def test_calendar_overflow(left, op, right):
    """Test that results outside years 1-9999 raise EvalError."""
    with pytest.raises(EvalError, match="out of range"):
        apply(left, op, right)


def test_apply_returns_new_values():
    """Test that operands are left untouched and values are frozen."""
    start = d(2023, 12, 25)
    result = apply(start, SUB, dur(7, Unit.DAYS))

    assert start == d(2023, 12, 25)
    assert result is not start
    with pytest.raises(FrozenInstanceError):
        start.day = 1  # type: ignore[misc]
