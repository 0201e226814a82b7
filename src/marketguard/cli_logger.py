"""CLI output utilities for consistent messaging.

Success and informational messages go to stdout, errors to stderr.
"""

from rich.console import Console
from rich.markup import escape

_console = Console()
_err_console = Console(stderr=True)


def success(message: str) -> None:
    """Print a success message with green checkmark."""
    _console.print(f"[green]✓[/green] {message}")


def error(message: str) -> None:
    """Print an error message with red X."""
    _err_console.print(f"[red]✗[/red] {escape(message)}")


def info(message: str) -> None:
    """Print an info message (no prefix)."""
    _console.print(message)


def plain_error(message: str) -> None:
    """Print a message to stderr verbatim, without markup or highlighting."""
    _err_console.print(message, markup=False, highlight=False, soft_wrap=True)
