"""
reckon CLI.

Prompts for one line, evaluates it, and prints the integer result. Every
evaluation or configuration error is reported as a single line on stderr
with exit code 1.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer
from pydantic import ValidationError

from reckon.cli.utils import fail, get_version, version_callback
from reckon.core.config import ReckonConfig, load_config
from reckon.core.errors import ConfigError, ReckonError
from reckon.core.expression_lang import evaluate

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Evaluate an integer arithmetic expression (+ - * /, parentheses, unary minus).",
    add_completion=False,
)


def _debug_echo(message: str) -> None:
    typer.echo(f"[debug] {message}")


def _resolve_config(
    config_path: Path | None,
    debug: bool | None,
    bits: int | None,
) -> ReckonConfig:
    """Load file/env config and apply command line overrides."""
    config = load_config(config_path)
    overrides: dict[str, object] = {}
    if debug is not None:
        overrides["debug"] = debug
    if bits is not None:
        overrides["int_bits"] = bits
    if overrides:
        # Re-validate so --bits goes through the same checks as the file
        try:
            config = ReckonConfig(**{**config.model_dump(), **overrides})
        except ValidationError as e:
            raise ConfigError(f"invalid option: {e}") from e
    return config


@app.command()
def calc(
    expression: str | None = typer.Argument(
        None,
        help=(
            "Expression to evaluate. If omitted, one line is read from stdin. "
            "Put -- before an expression that starts with a minus: reckon -- -5+3"
        ),
    ),
    debug: bool | None = typer.Option(
        None,
        "--debug/--no-debug",
        help="Print a trace line for every token and grammar rule",
    ),
    bits: int | None = typer.Option(
        None,
        "--bits",
        help="Signed integer width to enforce (0 for unbounded)",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help="Path to a reckon.toml or pyproject.toml",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable DEBUG logging on stderr",
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """Evaluate EXPRESSION, or prompt for one, and print the result."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = _resolve_config(config_path, debug, bits)
    except ReckonError as e:
        fail(e)

    if expression is None:
        typer.echo(config.prompt, nl=False)
        expression = sys.stdin.readline()

    source = expression.strip()
    logger.debug("Evaluating %r (reckon %s)", source, get_version())

    try:
        value = evaluate(
            source,
            debug=config.debug,
            trace=_debug_echo,
            int_bits=config.int_bits,
        )
    except ReckonError as e:
        fail(e, show_context=config.debug)

    typer.echo(f"Result: {value}")


def main() -> None:
    app(standalone_mode=True)


__all__ = ["app", "main"]
