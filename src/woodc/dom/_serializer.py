"""Document serialization to markup text."""

from xml.sax.saxutils import escape, quoteattr

from ._tree import Document, Element, NodeKind

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)


def _write(node: Element, parts: list[str], *, html: bool) -> None:
    match node.kind:
        case NodeKind.TEXT:
            parts.append(escape(node.text))
        case NodeKind.COMMENT:
            parts.append(f"<!--{node.text}-->")
        case NodeKind.ELEMENT:
            attrs = "".join(f" {k}={quoteattr(v)}" for k, v in node.attrs.items())
            child_nodes = node.child_nodes
            if not child_nodes and (not html or node.tag in VOID_ELEMENTS):
                parts.append(f"<{node.tag}{attrs} />")
                return
            parts.append(f"<{node.tag}{attrs}>")
            for child in child_nodes:
                _write(child, parts, html=html)
            parts.append(f"</{node.tag}>")


def serialize(node: Document | Element, *, html: bool = True) -> str:
    """Serialize a document or element subtree to markup.

    Args:
        node: Document or element to serialize.
        html: When true only void elements are self-closed, so the output
            is valid HTML; otherwise every empty element is self-closed.

    Returns:
        Markup text.
    """
    element = node.root if isinstance(node, Document) else node
    parts: list[str] = []
    _write(element, parts, html=html)
    return "".join(parts)
