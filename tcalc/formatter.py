"""Render values using the same literal syntax the lexer accepts."""

from tcalc.values import Date, DateTime, Duration, Time, Value


def format_value(value: Value) -> str:
    """Return the display string for a value.

    Example:
        >>> format_value(Time(hour=9, minute=5))
        '09:05'
    """
    if isinstance(value, Date):
        return f"{value.year:04d}/{value.month:02d}/{value.day:02d}"
    if isinstance(value, Time):
        text = f"{value.hour:02d}:{value.minute:02d}"
        if value.second:
            text += f":{value.second:02d}"
        return text
    if isinstance(value, DateTime):
        return f"{format_value(value.date)} {format_value(value.time)}"
    if isinstance(value, Duration):
        name = value.unit.singular if abs(value.amount) == 1 else value.unit.value
        return f"{value.amount} {name}"
    raise TypeError(f"Cannot format {type(value).__name__!r}: {value!r}")
