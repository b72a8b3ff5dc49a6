"""Error types raised while lexing, parsing and evaluating expressions.

All errors derive from TcalcError, so callers presenting results to a user
can catch a single type. None of them are retryable: the same input always
fails the same way.
"""

from typing import TYPE_CHECKING

from typing_extensions import override

if TYPE_CHECKING:
    from tcalc.values import Kind, Operator


class TcalcError(Exception):
    """Base class for every error tcalc raises on bad input."""


class LexError(TcalcError):
    """Raised when a piece of input text is not a valid token."""

    def __init__(self, message: str, *, text: str, position: int):
        super().__init__(message)
        self.message: str = message
        self.text: str = text
        self.position: int = position

    @override
    def __str__(self) -> str:
        return f"{self.message} (at position {self.position})"


class ParseError(TcalcError):
    """Raised when tokens are not in value/operator/value order."""

    def __init__(
        self,
        message: str,
        *,
        expected: str | None = None,
        found: str | None = None,
        position: int,
    ):
        super().__init__(message)
        self.message: str = message
        self.expected: str | None = expected
        self.found: str | None = found
        self.position: int = position

    @override
    def __str__(self) -> str:
        return f"{self.message} (at position {self.position})"


class EvalError(TcalcError):
    """Raised when an operator is applied to operands it does not support,
    or when the result falls outside the representable calendar.

    Keywords that resolve outside the calendar carry no operator or kinds.
    """

    def __init__(
        self,
        message: str,
        *,
        op: "Operator | None" = None,
        left: "Kind | None" = None,
        right: "Kind | None" = None,
    ):
        super().__init__(message)
        self.message: str = message
        self.op: "Operator | None" = op
        self.left: "Kind | None" = left
        self.right: "Kind | None" = right

    @override
    def __str__(self) -> str:
        if self.op is None:
            return self.message
        return f"{self.message}: {self.left} {self.op} {self.right}"
