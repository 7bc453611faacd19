"""Command-line interface for WOODC."""

from ._app import create_app, main
from ._shared import ExitCode

__all__ = ["ExitCode", "create_app", "main"]
