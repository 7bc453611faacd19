"""Owned document tree used by the composition engine.

Example:
    >>> from woodc.dom import parse_document, serialize
    >>> doc = parse_document("<div><p>a</p></div>")
    >>> doc.root.children[0].tag
    'p'
    >>> serialize(doc)
    '<div><p>a</p></div>'
"""

from ._parser import parse_document
from ._serializer import VOID_ELEMENTS, serialize
from ._tree import Document, Element, NodeKind

__all__ = [
    "VOID_ELEMENTS",
    "Document",
    "Element",
    "NodeKind",
    "parse_document",
    "serialize",
]
