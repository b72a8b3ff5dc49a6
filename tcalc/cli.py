"""
Command-line entry point.

Usage:
    tcalc "2023/12/25 - 7d"
    tcalc today - 2025/12/25          # words are joined with spaces
    tcalc --now 2025-01-31T09:00 "now + 1month"
    tcalc 2023/12/25 -7d              # dashed words stay in the expression

A dashed word made only of characters that are not short flags is passed
through, so "-7d" works. Words such as "-1week" contain the letter of a
flag (-k) and must be quoted with the rest of the expression or follow "--".
"""

import logging
from datetime import datetime

import typer
from dateutil.parser import isoparse

from tcalc.core import evaluate
from tcalc.errors import TcalcError
from tcalc.formatter import format_value

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Evaluate date/time arithmetic such as '2am + 30m' or 'today - 2025/12/25'.",
    no_args_is_help=True,
    add_completion=False,
)


def _parse_now(value: str | None) -> datetime | None:
    if value is None:
        return None
    try:
        return isoparse(value).replace(tzinfo=None)
    except ValueError as e:
        raise typer.BadParameter(
            f"'{value}' is not an ISO-8601 date/time ({e})", param_hint="--now"
        ) from e


@app.command(context_settings={"ignore_unknown_options": True})
def calc(
    expression: list[str] = typer.Argument(
        ..., help="Expression to evaluate; multiple words are joined with spaces"
    ),
    now: str | None = typer.Option(
        None,
        "--now",
        envvar="TCALC_NOW",
        help="ISO-8601 date/time to use for today/now (default: system clock)",
    ),
    kind: bool = typer.Option(
        False, "--kind", "-k", help="Also print the kind of the result"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log tokens and evaluation steps"
    ),
) -> None:
    """Evaluate a date/time expression and print the result."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(name)s %(levelname)s: %(message)s"
        )

    clock_reading = _parse_now(now)
    text = " ".join(expression)
    try:
        result = evaluate(text, clock_reading)
    except TcalcError as e:
        logger.debug("failed to evaluate %r", text, exc_info=True)
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=1) from e

    if kind:
        typer.echo(f"{format_value(result)} ({str(result.kind)})")
    else:
        typer.echo(format_value(result))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
