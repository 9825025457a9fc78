"""
reckon CLI utilities.

Shared helpers for the command line: version reporting and diagnostics.
"""

import platform
from typing import NoReturn

import typer
from rich.console import Console

from reckon.core.errors import ReckonError

err_console = Console(stderr=True, emoji=False)


def get_version() -> str:
    """Get reckon version from the package."""
    from reckon import __version__

    return __version__


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"reckon version {get_version()}")
        typer.echo(
            f"Python {platform.python_implementation()} {platform.python_version()}"
        )
        raise typer.Exit()


def fail(error: ReckonError, *, show_context: bool = False) -> NoReturn:
    """Print a one-line diagnostic to stderr and exit with code 1.

    With *show_context*, the source and a caret under the error column follow.
    """
    text = error.describe() if show_context else error.message
    err_console.print(f"error: {text}", markup=False, highlight=False, soft_wrap=True)
    raise typer.Exit(code=1)
