"""Variables resolver with language fallback and cycle detection."""

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager

from woodc.exceptions import CycleError, MissingEntityError
from woodc.paths import FilePath, parse_language
from woodc.reference import Reference, ReferenceHandler
from woodc.transforms import Evaluator, resolve_text
from woodc.utils import get_logger

from ._loader import parse_definitions

logger = get_logger("woodc.variables")

# Resolution trace of the variables being resolved in the current context.
_resolution_trace: contextvars.ContextVar[tuple[str, ...]] = contextvars.ContextVar(
    "variables_resolution_trace", default=()
)


@contextmanager
def _traced(entry: str) -> Iterator[None]:
    trace = _resolution_trace.get()
    if entry in trace:
        lines = "".join(f"\t- {item}\n" for item in (*trace, entry))
        msg = f"Circular variable references. Trace stack follows:\n{lines}"
        raise CycleError(msg, path=entry, trace=(*trace, entry))
    token = _resolution_trace.set((*trace, entry))
    try:
        yield
    finally:
        _resolution_trace.reset(token)


class Variables:
    """Variable values of one directory, grouped by language.

    The None language holds values from definition files without a
    language variant and is the fallback for every language.
    """

    __slots__ = ("_values",)

    def __init__(self) -> None:
        self._values: dict[str | None, dict[Reference, str]] = {}

    def load(self, file: FilePath, text: str) -> bool:
        """Load one definition file.

        Args:
            file: Definition file path; its language variant selects the group.
            text: File content.

        Returns:
            False if the file is not a variables definition.
        """
        definitions = parse_definitions(text, file.value)
        if definitions is None:
            return False
        language = file.variants.language
        self._values.setdefault(language, {}).update(definitions)
        logger.debug(
            "variables loaded",
            file=file.value,
            language=language,
            count=len(definitions),
        )
        return True

    def languages(self) -> list[str | None]:
        """Languages with at least one definition file loaded."""
        return list(self._values)

    def __contains__(self, reference: object) -> bool:
        return any(reference in values for values in self._values.values())

    def lookup(self, language: str | None, reference: Reference) -> str | None:
        """Return the raw value for a language, falling back to the default group.

        Empty values count as missing.
        """
        code = parse_language(language) if language else None
        value = self._values.get(code, {}).get(reference) if code else None
        if not value:
            value = self._values.get(None, {}).get(reference)
        return value or None

    def get(
        self,
        language: str | None,
        reference: Reference,
        source: FilePath,
        handler: ReferenceHandler,
        *,
        evaluator: Evaluator | None = None,
    ) -> str:
        """Return a variable value with nested references resolved.

        Args:
            language: Requested language, or None for the default values.
            reference: Variable reference.
            source: Source file declaring the reference.
            handler: Resolves nested references found in the value.
            evaluator: Interpreter for nested `@eval` expressions.

        Returns:
            The resolved value.

        Raises:
            MissingEntityError: If no non-empty value exists for the reference.
            CycleError: If the value refers back to itself, directly or
                transitively.
        """
        value = self.lookup(language, reference)
        if value is None:
            msg = f"Missing variable value for reference |{source}:{reference}|"
            raise MissingEntityError(
                msg, kind="variable", name=str(reference), source=source.value
            )

        with _traced(f"{source}:{reference}"):
            return resolve_text(value, source, handler, evaluator=evaluator)
