"""Composition operators and their attribute naming strategies.

Operators are reserved attributes expressing composition relations between
layouts. How an operator is spelled in markup depends on the project naming
strategy: `compo`, `data-compo` or `wood:compo`.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum

WOOD_NS = "js-lib.com/wood"
WOOD_PREFIX = "wood"
DATA_PREFIX = "data-"


class Operator(StrEnum):
    """Composition operators."""

    TEMPLATE = "template"
    EDITABLE = "editable"
    CONTENT = "content"
    COMPO = "compo"
    PARAM = "param"
    SCRIPT = "script"


class OperatorsNaming(StrEnum):
    """Attribute naming strategy for operators."""

    XMLNS = "xmlns"
    DATA_ATTR = "data-attr"
    ATTR = "attr"


def attribute_name(naming: OperatorsNaming, operator: Operator) -> str:
    """Return the attribute name of an operator in the parsed tree.

    Namespaced operators are normalized to the `wood:` prefix by the parser
    regardless of the prefix declared in source.

    Args:
        naming: Naming strategy.
        operator: The operator.

    Returns:
        The attribute name, e.g. "data-compo".
    """
    match naming:
        case OperatorsNaming.XMLNS:
            return f"{WOOD_PREFIX}:{operator}"
        case OperatorsNaming.DATA_ATTR:
            return f"{DATA_PREFIX}{operator}"
        case OperatorsNaming.ATTR:
            return str(operator)


def source_attribute_name(
    naming: OperatorsNaming, operator: Operator, prefix: str | None = None
) -> str:
    """Return the attribute name of an operator as written in source markup.

    Args:
        naming: Naming strategy.
        operator: The operator.
        prefix: Namespace prefix declared on the source root element; used by
            the XMLNS strategy only.
    """
    if naming is OperatorsNaming.XMLNS:
        return f"{prefix or WOOD_PREFIX}:{operator}"
    return attribute_name(naming, operator)


@dataclass(frozen=True, slots=True)
class CustomElement:
    """A custom tag bound to a component.

    Attributes:
        tag: Custom element tag name, containing a hyphen.
        compo: Component path the tag stands for.
        operator: Operator injected on the tag.
    """

    tag: str
    compo: str
    operator: Operator = Operator.COMPO


@dataclass(frozen=True, slots=True)
class CustomElementsRegistry:
    """Registry of custom element tags."""

    _elements: Mapping[str, CustomElement] = field(default_factory=dict)

    @classmethod
    def of(cls, elements: Iterable[CustomElement]) -> "CustomElementsRegistry":
        """Build a registry from custom element declarations."""
        return cls(_elements={element.tag: element for element in elements})

    def get(self, tag: str) -> CustomElement | None:
        """Look up a custom element by tag name."""
        return self._elements.get(tag)

    def __contains__(self, tag: object) -> bool:
        return tag in self._elements

    def __len__(self) -> int:
        return len(self._elements)
