"""Interpreter for `@eval(...)` expressions."""

from ._interpreter import (
    ExpressionInterpreter,
    FunctionRegistry,
    create_function_registry,
)

__all__ = ["ExpressionInterpreter", "FunctionRegistry", "create_function_registry"]
