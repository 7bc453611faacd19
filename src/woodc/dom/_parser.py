"""Markup parsing into the owned document tree.

Markup is parsed with xml.etree.ElementTree, then copied into a Document
arena. Attributes in the wood namespace are normalized to the `wood:`
prefix whatever prefix the source declares; other namespaced names keep
their declared prefix. HTML named entities are rewritten to numeric
character references before parsing; unknown names are left for the
parser to reject.
"""

import re
import xml.etree.ElementTree as ET
from html.entities import name2codepoint

from woodc.exceptions import StructureError
from woodc.operators import WOOD_NS, WOOD_PREFIX

from ._tree import Document, Element

_ENTITY_PATTERN = re.compile(r"&([A-Za-z][A-Za-z0-9]*);")
_XML_ENTITIES = frozenset({"amp", "lt", "gt", "quot", "apos"})
_XMLNS_PATTERN = re.compile(r"xmlns:([\w-]+)\s*=\s*[\"']([^\"']+)[\"']")


def _numeric_entity(match: re.Match[str]) -> str:
    name = match.group(1)
    if name in _XML_ENTITIES or name not in name2codepoint:
        return match.group(0)
    return f"&#{name2codepoint[name]};"


def _namespace_prefixes(text: str) -> dict[str, str]:
    prefixes: dict[str, str] = {WOOD_NS: WOOD_PREFIX}
    for prefix, uri in _XMLNS_PATTERN.findall(text):
        if uri != WOOD_NS:
            prefixes.setdefault(uri, prefix)
    return prefixes


def _qualified(name: str, prefixes: dict[str, str]) -> str:
    if not name.startswith("{"):
        return name
    uri, _, local = name[1:].partition("}")
    prefix = prefixes.get(uri)
    return f"{prefix}:{local}" if prefix else local


def _copy(
    source: ET.Element, target: Element, document: Document, prefixes: dict[str, str]
) -> None:
    if source.text:
        target.append_child(document.create_text(source.text))
    for child in source:
        if child.tag is ET.Comment:
            node = document.create_comment(child.text or "")
        else:
            node = document.create_element(
                _qualified(str(child.tag), prefixes),
                {_qualified(k, prefixes): v for k, v in child.attrib.items()},
            )
            _copy(child, node, document, prefixes)
        target.append_child(node)
        if child.tail:
            target.append_child(document.create_text(child.tail))


def parse_document(text: str, source: str | None = None) -> Document:
    """Parse markup text into a Document.

    HTML named entities (e.g. `&nbsp;`) are accepted besides the XML ones.

    Args:
        text: Markup text, typically a layout after source transforms.
        source: Source path for error messages.

    Returns:
        The parsed Document.

    Raises:
        StructureError: If the text is empty or not well formed.
    """
    where = f" |{source}|" if source else ""
    if not text.strip():
        msg = f"Empty layout document{where}"
        raise StructureError(msg, path=source)

    # expat rejects undeclared named entities before any entity hook runs.
    markup = _ENTITY_PATTERN.sub(_numeric_entity, text)
    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
    try:
        parser.feed(markup)
        root = parser.close()
        prefixes = _namespace_prefixes(text)
    except ET.ParseError as e:
        line, column = e.position
        msg = f"Invalid markup in document{where} at line {line}, column {column}: {e}"
        raise StructureError(msg, path=source) from e

    document = Document(
        _qualified(str(root.tag), prefixes),
        {_qualified(k, prefixes): v for k, v in root.attrib.items()},
    )
    _copy(root, document.root, document, prefixes)
    return document
