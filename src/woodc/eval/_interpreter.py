"""Expression evaluation for `@eval(...)` references.

This module provides the interpreter used by the reference-substitution
transform, using rule-engine as the underlying expression parser and
evaluator with a small set of styling helper functions.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

import rule_engine
import rule_engine.builtins as rule_builtins
from rule_engine import errors as rule_errors

from woodc.exceptions import ExpressionError


def _px(value: float) -> str:
    return f"{_format_number(value)}px"


def _em(value: float) -> str:
    return f"{_format_number(value)}em"


def _percent(value: float) -> str:
    return f"{_format_number(value)}%"


def _format_number(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    # rule-engine evaluates numeric literals as Decimal
    if isinstance(value, (float, Decimal)) and math.isfinite(value):
        if value == int(value):
            return str(int(value))
    return str(value)


@dataclass(frozen=True, slots=True)
class FunctionRegistry:
    """Registry of custom expression functions.

    Functions are exposed as rule-engine builtins and called with the `$`
    prefix, e.g. `$px(4 * 3)`.
    """

    _functions: dict[str, Callable[..., object]] = field(default_factory=dict)

    def get(self, name: str) -> Callable[..., object] | None:
        """Get function by name (without $ prefix)."""
        return self._functions.get(name)

    def all_functions(self) -> dict[str, Callable[..., object]]:
        """Get all registered functions.

        Returns:
            A copy of the function registry dictionary.
        """
        return dict(self._functions)


def create_function_registry() -> FunctionRegistry:
    """Create a registry with the built-in styling functions."""
    functions: dict[str, Callable[..., object]] = {
        "px": _px,
        "em": _em,
        "percent": _percent,
        "ceil": math.ceil,
        "floor": math.floor,
    }
    return FunctionRegistry(_functions=functions)


def _create_rule_context(registry: FunctionRegistry) -> rule_engine.Context:
    functions = registry.all_functions()

    def resolver(thing: dict[str, Any], name: str) -> object:  # pyright: ignore[reportExplicitAny]
        if name in functions:
            return functions[name]
        return thing.get(name)

    ctx = rule_engine.Context(resolver=resolver, default_value=None)
    ctx.builtins = rule_builtins.Builtins.from_defaults(values=functions)
    return ctx


@dataclass(frozen=True, slots=True)
class ExpressionInterpreter:
    """Evaluates `@eval` expression text to its substitution value.

    Instances are reusable; a rule-engine context is created once per
    interpreter.
    """

    registry: FunctionRegistry = field(default_factory=create_function_registry)
    _context: rule_engine.Context = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_context", _create_rule_context(self.registry))

    def evaluate(self, expression: str, source: str | None = None) -> str:
        """Compile and evaluate an expression.

        Args:
            expression: Expression text, with nested references already
                substituted.
            source: Source file declaring the expression, for error reporting.

        Returns:
            The evaluation result rendered as text.

        Raises:
            ExpressionError: If the expression is invalid or evaluation fails.
        """
        where = f" in source file |{source}|" if source else ""
        try:
            rule = rule_engine.Rule(expression, context=self._context)
        except rule_errors.RuleSyntaxError as e:
            msg = f"Invalid expression |{expression}|{where}. {e.message}"
            raise ExpressionError(
                msg, expression=expression, source=source, cause=e
            ) from e
        except rule_errors.SymbolResolutionError as e:
            msg = f"Unknown symbol |{e.symbol_name}| in |{expression}|{where}"
            raise ExpressionError(
                msg, expression=expression, source=source, cause=e
            ) from e

        try:
            result = rule.evaluate({})
        except rule_errors.EvaluationError as e:
            msg = f"Expression |{expression}| evaluation failed{where}. {e.message}"
            raise ExpressionError(
                msg, expression=expression, source=source, cause=e
            ) from e

        if result is None:
            return ""
        return _format_number(result)

    def __call__(self, expression: str, source: str | None = None) -> str:
        return self.evaluate(expression, source)
