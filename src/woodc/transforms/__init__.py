"""Streaming source transforms.

Each transform turns one character stream into another and is exposed both
as a lazy iterator and as a whole-string helper:

- `iter_injected` / `inject_text` add missing custom element operators
- `iter_resolved` / `resolve_text` substitute embedded references

Example:
    >>> from woodc.transforms import resolve_text
    >>> resolve_text("a @@b", source, handler)
    'a @b'
"""

from ._layout import inject_text, iter_injected
from ._parameters import LayoutParameters
from ._source import Evaluator, iter_resolved, resolve_text

__all__ = [
    "Evaluator",
    "LayoutParameters",
    "inject_text",
    "iter_injected",
    "iter_resolved",
    "resolve_text",
]
