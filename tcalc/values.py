from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, TypeAlias

from tcalc.calendar import (
    MAX_YEAR,
    MIN_YEAR,
    civil_from_days,
    days_from_civil,
    days_in_month,
    split_seconds,
)
from tcalc.util import DAY, HOUR, MINUTE, SECOND


class Kind(Enum):
    DATE = "Date"
    TIME = "Time"
    DATETIME = "DateTime"
    DURATION = "Duration"

    def __str__(self) -> str:
        return self.value


class Unit(Enum):
    """Duration units, ordered from coarsest to finest."""

    YEARS = "years"
    MONTHS = "months"
    DAYS = "days"
    HOURS = "hours"
    MINUTES = "minutes"
    SECONDS = "seconds"

    @property
    def singular(self) -> str:
        return self.value[:-1]

    @property
    def is_calendar(self) -> bool:
        """True for units with no fixed length in seconds (months, years)."""
        return self in (Unit.YEARS, Unit.MONTHS)

    @property
    def is_clock(self) -> bool:
        """True for units finer than a day."""
        return self in (Unit.HOURS, Unit.MINUTES, Unit.SECONDS)

    @property
    def seconds(self) -> int:
        if self.is_calendar:
            raise ValueError(f"{self.value} have no fixed length in seconds")
        return SCALES[self]

    @classmethod
    def parse(cls, text: str) -> "Unit":
        try:
            return UNIT_ALIASES[text.lower()]
        except KeyError:
            valid = ", ".join(UNIT_ALIASES)
            raise ValueError(f"Unknown unit '{text}'. Valid units: {valid}") from None


SCALES = {
    Unit.DAYS: DAY,
    Unit.HOURS: HOUR,
    Unit.MINUTES: MINUTE,
    Unit.SECONDS: SECOND,
}

UNIT_ALIASES = {
    "y": Unit.YEARS,
    "year": Unit.YEARS,
    "years": Unit.YEARS,
    "month": Unit.MONTHS,
    "months": Unit.MONTHS,
    "d": Unit.DAYS,
    "day": Unit.DAYS,
    "days": Unit.DAYS,
    "h": Unit.HOURS,
    "hour": Unit.HOURS,
    "hours": Unit.HOURS,
    "m": Unit.MINUTES,
    "minute": Unit.MINUTES,
    "minutes": Unit.MINUTES,
    "s": Unit.SECONDS,
    "second": Unit.SECONDS,
    "seconds": Unit.SECONDS,
}


class Keyword(Enum):
    """Literals whose value depends on the clock at evaluation time."""

    TODAY = "today"
    TOMORROW = "tomorrow"
    YESTERDAY = "yesterday"
    NOW = "now"


@dataclass(frozen=True, kw_only=True)
class Date:
    kind: ClassVar[Kind] = Kind.DATE

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        if not (MIN_YEAR <= self.year <= MAX_YEAR):
            raise ValueError(
                f"Date year ({self.year}) must be {MIN_YEAR}-{MAX_YEAR}"
            )
        if not (1 <= self.month <= 12):
            raise ValueError(f"Date month ({self.month}) must be 1-12")
        last = days_in_month(self.year, self.month)
        if not (1 <= self.day <= last):
            raise ValueError(
                f"Date day ({self.day}) must be 1-{last} "
                f"for {self.year:04d}/{self.month:02d}"
            )

    @classmethod
    def from_days(cls, days: int) -> "Date":
        """Build a Date from a day count relative to 1970/01/01."""
        year, month, day = civil_from_days(days)
        return cls(year=year, month=month, day=day)

    def to_days(self) -> int:
        return days_from_civil(self.year, self.month, self.day)

    def __str__(self) -> str:
        from tcalc.formatter import format_value

        return format_value(self)


@dataclass(frozen=True, kw_only=True)
class Time:
    kind: ClassVar[Kind] = Kind.TIME

    hour: int
    minute: int
    second: int = 0

    def __post_init__(self) -> None:
        if not (0 <= self.hour <= 23):
            raise ValueError(f"Time hour ({self.hour}) must be 0-23")
        if not (0 <= self.minute <= 59):
            raise ValueError(f"Time minute ({self.minute}) must be 0-59")
        if not (0 <= self.second <= 59):
            raise ValueError(f"Time second ({self.second}) must be 0-59")

    @classmethod
    def from_seconds(cls, seconds: int) -> "Time":
        """Build a Time from seconds since midnight, wrapping modulo 24h."""
        _, hour, minute, second = split_seconds(seconds)
        return cls(hour=hour, minute=minute, second=second)

    def to_seconds(self) -> int:
        return self.hour * HOUR + self.minute * MINUTE + self.second

    def __str__(self) -> str:
        from tcalc.formatter import format_value

        return format_value(self)


MIDNIGHT = Time(hour=0, minute=0)


@dataclass(frozen=True, kw_only=True)
class DateTime:
    kind: ClassVar[Kind] = Kind.DATETIME

    date: Date
    time: Time = MIDNIGHT

    @classmethod
    def from_seconds(cls, seconds: int) -> "DateTime":
        """Build a DateTime from seconds relative to 1970/01/01 00:00."""
        days, hour, minute, second = split_seconds(seconds)
        return cls(
            date=Date.from_days(days),
            time=Time(hour=hour, minute=minute, second=second),
        )

    def to_seconds(self) -> int:
        return self.date.to_days() * DAY + self.time.to_seconds()

    def __str__(self) -> str:
        from tcalc.formatter import format_value

        return format_value(self)


@dataclass(frozen=True, kw_only=True)
class Duration:
    kind: ClassVar[Kind] = Kind.DURATION

    amount: int
    unit: Unit

    def __str__(self) -> str:
        from tcalc.formatter import format_value

        return format_value(self)


Value: TypeAlias = Date | Time | DateTime | Duration


class Operator(Enum):
    ADD = "+"
    SUB = "-"

    def __str__(self) -> str:
        return self.value
