from .core import evaluate, run
from .errors import EvalError, LexError, ParseError, TcalcError
from .formatter import format_value
from .lexer import tokenize
from .values import Date, DateTime, Duration, Keyword, Kind, Operator, Time, Unit, Value

__all__ = [
    "evaluate",
    "run",
    "tokenize",
    "format_value",
    "Date",
    "Time",
    "DateTime",
    "Duration",
    "Unit",
    "Kind",
    "Keyword",
    "Operator",
    "Value",
    "TcalcError",
    "LexError",
    "ParseError",
    "EvalError",
]
