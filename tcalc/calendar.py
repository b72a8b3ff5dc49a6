"""Proleptic Gregorian calendar arithmetic on plain integers.

These functions never touch ``datetime``: clamping and carry behavior is
defined here rather than inherited from a library default.
"""

from tcalc.util import DAY, HOUR, MINUTE, MONTHS_PER_YEAR

MIN_YEAR = 1
MAX_YEAR = 9999

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    if not (1 <= month <= MONTHS_PER_YEAR):
        raise ValueError(f"month must be 1-12, got {month}")
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def check_year(year: int) -> int:
    """Raise OverflowError if year falls outside the representable range."""
    if not (MIN_YEAR <= year <= MAX_YEAR):
        raise OverflowError(
            f"year {year} is out of range ({MIN_YEAR}-{MAX_YEAR})"
        )
    return year


def days_from_civil(year: int, month: int, day: int) -> int:
    """Return the number of days between 1970/01/01 and the given date.

    Algorithm: shift the year to start in March so the leap day falls at the
    end, then count whole 400-year eras plus the day of era.
    """
    y = year - 1 if month <= 2 else year
    era = y // 400
    year_of_era = y - era * 400
    shifted_month = month - 3 if month > 2 else month + 9
    day_of_year = (153 * shifted_month + 2) // 5 + day - 1
    day_of_era = year_of_era * 365 + year_of_era // 4 - year_of_era // 100 + day_of_year
    return era * 146097 + day_of_era - 719468


def civil_from_days(days: int) -> tuple[int, int, int]:
    """Inverse of days_from_civil: map a day count back to (year, month, day)."""
    z = days + 719468
    era = z // 146097
    day_of_era = z - era * 146097
    year_of_era = (
        day_of_era - day_of_era // 1460 + day_of_era // 36524 - day_of_era // 146096
    ) // 365
    day_of_year = day_of_era - (
        365 * year_of_era + year_of_era // 4 - year_of_era // 100
    )
    shifted_month = (5 * day_of_year + 2) // 153
    day = day_of_year - (153 * shifted_month + 2) // 5 + 1
    month = shifted_month + 3 if shifted_month < 10 else shifted_month - 9
    year = year_of_era + era * 400 + (1 if month <= 2 else 0)
    return year, month, day


def add_days(year: int, month: int, day: int, days: int) -> tuple[int, int, int]:
    result = civil_from_days(days_from_civil(year, month, day) + days)
    check_year(result[0])
    return result


def add_months(year: int, month: int, day: int, months: int) -> tuple[int, int, int]:
    """Shift a date by whole months, clamping the day to the target month.

    Example:
        >>> add_months(2025, 1, 31, 1)
        (2025, 2, 28)
    """
    total = year * MONTHS_PER_YEAR + (month - 1) + months
    new_year, new_month = divmod(total, MONTHS_PER_YEAR)
    check_year(new_year)
    new_month += 1
    return new_year, new_month, min(day, days_in_month(new_year, new_month))


def split_seconds(seconds: int) -> tuple[int, int, int, int]:
    """Split a second count into (days, hour, minute, second) with carry.

    Negative counts borrow from the day, so the time fields are never negative.
    """
    days, rest = divmod(seconds, DAY)
    hour, rest = divmod(rest, HOUR)
    minute, second = divmod(rest, MINUTE)
    return days, hour, minute, second
