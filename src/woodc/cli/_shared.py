"""Shared CLI utilities: exit codes and error output."""

from enum import IntEnum
from typing import TYPE_CHECKING, Never

from rich.markup import escape

if TYPE_CHECKING:
    from rich.console import Console


class ExitCode(IntEnum):
    """Exit codes of the WOODC CLI."""

    SUCCESS = 0
    BUILD_ERROR = 1


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.BUILD_ERROR,
    *,
    console: "Console",
) -> Never:
    """Print an error message and exit with the specified code.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
    raise SystemExit(code)
