"""Console output helpers for the command line tools."""

import functools
import sys

import click
from rich.console import Console
from rich.markup import escape

console = Console(stderr=True)


def success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {escape(message)}", soft_wrap=True)


def error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]✗[/red] {escape(message)}", highlight=False, soft_wrap=True)


def handle_errors(func):
    """
    Decorator for click commands.

    Lets click and ``sys.exit`` propagate, and exits with 130 on Ctrl+C.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (click.exceptions.ClickException, click.exceptions.Exit, click.exceptions.Abort, SystemExit):
            raise
        except KeyboardInterrupt:
            error("Interrupted")
            sys.exit(130)

    return wrapper
