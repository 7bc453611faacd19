"""WOODC exceptions."""

from pathlib import Path


class WoodError(Exception):
    """Base exception for WOODC errors."""


class GrammarError(WoodError):
    """Raised when a value violates a syntax rule (path, variant, reference)."""

    def __init__(self, message: str, *, value: str, grammar: str) -> None:
        """Initialize with error message and the rejected value."""
        super().__init__(message)
        self.value: str = value
        self.grammar: str = grammar


class MissingEntityError(WoodError, LookupError):
    """Raised when a named source entity cannot be found."""

    def __init__(
        self,
        message: str,
        *,
        kind: str,
        name: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and missing entity context."""
        super().__init__(message)
        self.kind: str = kind
        self.name: str = name
        self.source: str | None = source


class StructureError(WoodError):
    """Raised when source markup breaks a composition rule."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        """Initialize with error message and offending source path."""
        super().__init__(message)
        self.path: str | None = path


class CycleError(WoodError):
    """Raised when a resolution exceeds its recursion bound or loops back on itself."""

    def __init__(
        self,
        message: str,
        *,
        path: str,
        trace: tuple[str, ...] = (),
    ) -> None:
        """Initialize with error message, offending path and resolution trace."""
        super().__init__(message)
        self.path: str = path
        self.trace: tuple[str, ...] = trace


class ExpressionError(WoodError):
    """Raised when an @eval expression is invalid or cannot be evaluated."""

    def __init__(
        self,
        message: str,
        *,
        expression: str,
        source: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and expression context."""
        super().__init__(message)
        self.expression: str = expression
        self.source: str | None = source
        self.cause: Exception | None = cause


class ConfigError(WoodError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column
