"""Custom-element operator-injection transform.

Rewrites layout markup so that every custom element (a tag name containing a
hyphen) carries the composition operator bound to its tag in the custom
elements registry, e.g. `<app-dialog>` becomes
`<app-dialog data-compo="res/compo/dialog">`. Only the current tag is
buffered; text, end tags, comments and the prolog pass through unchanged.
"""

import re
from collections.abc import Iterable, Iterator
from enum import StrEnum

from woodc.exceptions import StructureError
from woodc.operators import (
    WOOD_NS,
    CustomElementsRegistry,
    Operator,
    OperatorsNaming,
    source_attribute_name,
)

_NAMESPACE_PATTERN = re.compile(r"xmlns:([\w-]+)\s*=\s*[\"']" + re.escape(WOOD_NS))
_QUOTED_PATTERN = re.compile(r"\"[^\"]*\"|'[^']*'")


class _State(StrEnum):
    WAIT_ROOT = "wait_root"
    PROLOG = "prolog"
    COMMENT = "comment"
    TEXT = "text"
    START_TAG = "start_tag"
    END_TAG = "end_tag"
    TAG_NAME = "tag_name"
    ATTRIBUTES = "attributes"
    SINGLE_QUOTE = "single_quote"
    DOUBLE_QUOTE = "double_quote"


def iter_injected(
    chars: Iterable[str],
    registry: CustomElementsRegistry,
    naming: OperatorsNaming = OperatorsNaming.DATA_ATTR,
) -> Iterator[str]:
    """Yield layout characters with missing custom element operators injected.

    Args:
        chars: Layout source characters.
        registry: Custom elements registry.
        naming: Operator naming strategy of the project.

    Yields:
        Output characters.

    Raises:
        StructureError: If a custom element is neither registered nor
            carries an explicit operator.
    """
    state = _State.WAIT_ROOT
    prefix: str | None = None
    root_seen = False
    buffer: list[str] = []
    name: list[str] = []

    for char in chars:
        match state:
            case _State.WAIT_ROOT | _State.TEXT:
                if char == "<":
                    buffer = [char]
                    name = []
                    state = _State.START_TAG
                else:
                    yield char

            case _State.START_TAG:
                buffer.append(char)
                if char == "?":
                    state = _State.PROLOG
                elif char == "!":
                    state = _State.COMMENT
                elif char == "/":
                    yield from buffer
                    state = _State.END_TAG
                else:
                    name.append(char)
                    state = _State.TAG_NAME

            case _State.PROLOG | _State.COMMENT:
                buffer.append(char)
                if char == ">" and _declaration_closed(buffer):
                    yield from buffer
                    state = _State.TEXT if root_seen else _State.WAIT_ROOT

            case _State.END_TAG:
                yield char
                if char == ">":
                    state = _State.TEXT

            case _State.TAG_NAME:
                buffer.append(char)
                if char == ">":
                    state = _State.TEXT
                    tag = "".join(buffer)
                    if not root_seen:
                        root_seen = True
                        prefix = _namespace_prefix(tag)
                    yield from _inject(tag, "".join(name), registry, naming, prefix)
                elif char.isspace() or char == "/":
                    state = _State.ATTRIBUTES
                else:
                    name.append(char)

            case _State.ATTRIBUTES:
                buffer.append(char)
                if char == '"':
                    state = _State.DOUBLE_QUOTE
                elif char == "'":
                    state = _State.SINGLE_QUOTE
                elif char == ">":
                    state = _State.TEXT
                    tag = "".join(buffer)
                    if not root_seen:
                        root_seen = True
                        prefix = _namespace_prefix(tag)
                    yield from _inject(tag, "".join(name), registry, naming, prefix)

            case _State.DOUBLE_QUOTE:
                buffer.append(char)
                if char == '"':
                    state = _State.ATTRIBUTES

            case _State.SINGLE_QUOTE:
                buffer.append(char)
                if char == "'":
                    state = _State.ATTRIBUTES

    if state not in (_State.WAIT_ROOT, _State.TEXT, _State.END_TAG):
        yield from buffer


def inject_text(
    text: str,
    registry: CustomElementsRegistry,
    naming: OperatorsNaming = OperatorsNaming.DATA_ATTR,
) -> str:
    """Inject missing custom element operators into markup; see iter_injected."""
    return "".join(iter_injected(text, registry, naming))


def _declaration_closed(buffer: list[str]) -> bool:
    if buffer[:4] == ["<", "!", "-", "-"]:
        return len(buffer) >= 7 and buffer[-3:] == ["-", "-", ">"]
    return True


def _namespace_prefix(tag: str) -> str | None:
    match = _NAMESPACE_PATTERN.search(tag)
    return match.group(1) if match else None


def _has_attribute(tag: str, attribute: str) -> bool:
    unquoted = _QUOTED_PATTERN.sub('""', tag)
    pattern = r"[\s/]" + re.escape(attribute) + r"\s*="
    return re.search(pattern, unquoted) is not None


def _inject(
    tag: str,
    name: str,
    registry: CustomElementsRegistry,
    naming: OperatorsNaming,
    prefix: str | None,
) -> str:
    if "-" not in name:
        return tag

    element = registry.get(name)
    if element is None:
        for operator in (Operator.COMPO, Operator.TEMPLATE):
            if _has_attribute(tag, source_attribute_name(naming, operator, prefix)):
                return tag
        msg = f"Not registered custom element |{name}|"
        raise StructureError(msg)

    attribute = source_attribute_name(naming, element.operator, prefix)
    if _has_attribute(tag, attribute):
        return tag

    end = len(tag) - 2 if tag.endswith("/>") else len(tag) - 1
    return f'{tag[:end].rstrip()} {attribute}="{element.compo}"{tag[end:]}'
