"""Reference-substitution transform.

Recognizes the embedded reference grammar in a character stream and replaces
each token with its value:

- `@<type>/[path/]name` resolves through the reference handler
- `@param/name` resolves from layout parameters
- `@eval(expr)` resolves nested references in expr, then evaluates it
- `@@` is an escape for a literal `@`

Any other `@` text (e.g. CSS `@media`) passes through unchanged. Only the
current token is buffered.
"""

from collections.abc import Callable, Iterable, Iterator
from enum import StrEnum

from woodc.eval import ExpressionInterpreter
from woodc.exceptions import MissingEntityError
from woodc.paths import FilePath
from woodc.reference import Reference, ReferenceHandler

from ._parameters import LayoutParameters

Evaluator = Callable[[str, str | None], str]

PARAM_PREFIX = "param/"
EVAL_PREFIX = "eval("

_DEFAULT_INTERPRETER = ExpressionInterpreter()


class _State(StrEnum):
    TEXT = "text"
    AT_META = "at_meta"
    VALUE = "value"


class _MetaBuilder:
    """Accumulates the text of one `@` token."""

    __slots__ = ("_chars", "_complete", "_nesting")

    def __init__(self) -> None:
        self._chars: list[str] = []
        self._nesting = 0
        self._complete = False

    def add(self, char: str) -> bool:
        """Append a character if it belongs to the token.

        Returns:
            False when char delimits the token and was not consumed.
        """
        if self._nesting > 0:
            self._chars.append(char)
            if char == "(":
                self._nesting += 1
            elif char == ")":
                self._nesting -= 1
                self._complete = self._nesting == 0
            return True
        if char == "(" and "".join(self._chars) == "eval":
            self._chars.append(char)
            self._nesting = 1
            return True
        if char.isalnum() or char in "-/":
            self._chars.append(char)
            return True
        return False

    @property
    def complete(self) -> bool:
        """Whether an evaluation token reached its closing parenthesis."""
        return self._complete

    @property
    def in_evaluation(self) -> bool:
        return self._nesting > 0

    def __str__(self) -> str:
        return "".join(self._chars)


def iter_resolved(
    chars: Iterable[str],
    source: FilePath,
    handler: ReferenceHandler,
    *,
    parameters: LayoutParameters | None = None,
    evaluator: Evaluator | None = None,
) -> Iterator[str]:
    """Yield the characters of a source with references substituted.

    Args:
        chars: Source characters, e.g. a file opened for reading or a string.
        source: Source file, passed to the handler and used in messages.
        handler: Resolves resource references.
        parameters: Layout parameters; when None the source is not
            parameterizable and `@param` tokens are left as they are.
        evaluator: Interpreter for `@eval` expressions.

    Yields:
        Output characters.

    Raises:
        GrammarError: On an invalid reference.
        MissingEntityError: On a missing parameter or an empty resolved value.
        ExpressionError: On an invalid `@eval` expression.
    """
    evaluate = evaluator if evaluator is not None else _DEFAULT_INTERPRETER
    upstream = iter(chars)
    pushback: str | None = None
    state = _State.TEXT
    meta = _MetaBuilder()
    value = ""

    while True:
        match state:
            case _State.TEXT:
                if pushback is not None:
                    char, pushback = pushback, None
                else:
                    char = next(upstream, None)
                if char is None:
                    return
                if char == "@":
                    meta = _MetaBuilder()
                    state = _State.AT_META
                else:
                    yield char

            case _State.AT_META:
                char = next(upstream, None)
                if char == "@" and not str(meta):
                    value = "@"
                    state = _State.VALUE
                    continue
                if char is not None and meta.add(char):
                    if not meta.complete:
                        continue
                    char = None
                value = _resolve_token(meta, source, handler, parameters, evaluate)
                pushback = char
                state = _State.VALUE

            case _State.VALUE:
                yield from value
                state = _State.TEXT


def resolve_text(
    text: str,
    source: FilePath,
    handler: ReferenceHandler,
    *,
    parameters: LayoutParameters | None = None,
    evaluator: Evaluator | None = None,
) -> str:
    """Substitute every reference in text; see iter_resolved."""
    return "".join(
        iter_resolved(
            text, source, handler, parameters=parameters, evaluator=evaluator
        )
    )


def _resolve_token(
    meta: _MetaBuilder,
    source: FilePath,
    handler: ReferenceHandler,
    parameters: LayoutParameters | None,
    evaluate: Evaluator,
) -> str:
    token = str(meta)

    if meta.complete and token.startswith(EVAL_PREFIX):
        expression = resolve_text(
            token[len(EVAL_PREFIX) : -1],
            source,
            handler,
            parameters=parameters,
            evaluator=evaluate,
        )
        return evaluate(expression, source.value)

    if meta.in_evaluation or "/" not in token:
        return "@" + token

    if token.startswith(PARAM_PREFIX):
        if parameters is None:
            return "@" + token
        name = token[len(PARAM_PREFIX) :]
        value = parameters.get(name)
        if value is None:
            msg = f"Missing layout parameter |{name}| in source file |{source}|"
            raise MissingEntityError(
                msg, kind="parameter", name=name, source=source.value
            )
        return value

    reference = Reference.parse(token)
    value = handler(reference, source)
    if not value:
        kind = "variable" if reference.is_variable else "media"
        msg = f"Missing value for reference |{reference}| in source file |{source}|"
        raise MissingEntityError(
            msg, kind=kind, name=str(reference), source=source.value
        )
    return value
