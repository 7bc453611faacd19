"""Owned mutable document tree.

A Document is an arena of nodes addressed by index; parent and child links
are indices into the arena. Element is a lightweight handle over one index,
so handles stay valid while the tree is rearranged. Nodes detached from the
tree stay in the arena but are unreachable from the root.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum


class NodeKind(StrEnum):
    """Kinds of nodes held by a document arena."""

    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"


@dataclass(slots=True)
class _Node:
    kind: NodeKind
    tag: str = ""
    text: str = ""
    attrs: dict[str, str] = field(default_factory=dict)
    parent: int | None = None
    children: list[int] = field(default_factory=list)


class Document:
    """Arena-backed document with a single root element."""

    __slots__ = ("_nodes", "_root")

    def __init__(self, root_tag: str, attrs: dict[str, str] | None = None) -> None:
        """Create a document with an empty root element.

        Args:
            root_tag: Tag name of the root element.
            attrs: Root element attributes.
        """
        self._nodes: list[_Node] = []
        self._root: int = self._add(
            _Node(kind=NodeKind.ELEMENT, tag=root_tag, attrs=dict(attrs or {}))
        )

    def _add(self, node: _Node) -> int:
        self._nodes.append(node)
        return len(self._nodes) - 1

    def _node(self, index: int) -> _Node:
        return self._nodes[index]

    @property
    def root(self) -> "Element":
        """The root element."""
        return Element(self, self._root)

    def create_element(
        self, tag: str, attrs: dict[str, str] | None = None
    ) -> "Element":
        """Create a detached element owned by this document."""
        node = _Node(kind=NodeKind.ELEMENT, tag=tag, attrs=dict(attrs or {}))
        return Element(self, self._add(node))

    def create_text(self, text: str) -> "Element":
        """Create a detached text node owned by this document."""
        return Element(self, self._add(_Node(kind=NodeKind.TEXT, text=text)))

    def create_comment(self, text: str) -> "Element":
        """Create a detached comment node owned by this document."""
        return Element(self, self._add(_Node(kind=NodeKind.COMMENT, text=text)))

    def import_node(self, node: "Element") -> "Element":
        """Deep copy a node, possibly from another document, into this arena.

        Args:
            node: Node to copy.

        Returns:
            The detached copy.
        """
        source = node.document._node(node.index)
        copy = _Node(
            kind=source.kind, tag=source.tag, text=source.text, attrs=dict(source.attrs)
        )
        index = self._add(copy)
        for child in node.child_nodes:
            child_copy = self.import_node(child)
            self._node(child_copy.index).parent = index
            copy.children.append(child_copy.index)
        return Element(self, index)

    def find_by_attr(self, name: str, value: str | None = None) -> list["Element"]:
        """Find elements carrying an attribute, in document order.

        Args:
            name: Attribute name.
            value: Required attribute value; any value when None.
        """
        return self.root.find_by_attr(name, value)

    def find_by_tag(self, tag: str) -> list["Element"]:
        """Find elements by tag name, in document order."""
        return [element for element in self.root.iter() if element.tag == tag]


class Element:
    """Handle over one node of a document arena.

    Handles compare equal when they address the same node of the same
    document.
    """

    __slots__ = ("document", "index")

    def __init__(self, document: Document, index: int) -> None:
        self.document: Document = document
        self.index: int = index

    @property
    def _data(self) -> _Node:
        return self.document._node(self.index)  # noqa: SLF001

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        return self.document is other.document and self.index == other.index

    def __hash__(self) -> int:
        return hash((id(self.document), self.index))

    def __repr__(self) -> str:
        data = self._data
        if data.kind is NodeKind.ELEMENT:
            return f"<Element {data.tag} {data.attrs!r}>"
        return f"<{data.kind.capitalize()} {data.text!r}>"

    # -------------------------------------------------------------------------
    # Node data

    @property
    def kind(self) -> NodeKind:
        return self._data.kind

    @property
    def is_element(self) -> bool:
        return self._data.kind is NodeKind.ELEMENT

    @property
    def tag(self) -> str:
        return self._data.tag

    @property
    def text(self) -> str:
        """Text of a text or comment node; concatenated descendant text otherwise."""
        data = self._data
        if data.kind is not NodeKind.ELEMENT:
            return data.text
        return "".join(
            child.text
            for child in self.child_nodes
            if child.kind is not NodeKind.COMMENT
        )

    @property
    def attrs(self) -> dict[str, str]:
        """A copy of the attributes, in declaration order."""
        return dict(self._data.attrs)

    def get_attr(self, name: str) -> str | None:
        return self._data.attrs.get(name)

    def has_attr(self, name: str) -> bool:
        return name in self._data.attrs

    def set_attr(self, name: str, value: str) -> None:
        self._data.attrs[name] = value

    def remove_attr(self, name: str) -> None:
        self._data.attrs.pop(name, None)

    # -------------------------------------------------------------------------
    # Navigation

    @property
    def parent(self) -> "Element | None":
        parent = self._data.parent
        return None if parent is None else Element(self.document, parent)

    @property
    def child_nodes(self) -> list["Element"]:
        """All child nodes, including text and comments."""
        return [Element(self.document, index) for index in self._data.children]

    @property
    def children(self) -> list["Element"]:
        """Child elements only."""
        return [child for child in self.child_nodes if child.is_element]

    @property
    def has_children(self) -> bool:
        """Whether the element holds child elements or non-blank text."""
        for child in self.child_nodes:
            if child.is_element:
                return True
            if child.kind is NodeKind.TEXT and child.text.strip():
                return True
        return False

    @property
    def is_empty(self) -> bool:
        return not self.has_children

    def iter(self) -> Iterator["Element"]:
        """Iterate this element and its descendant elements in document order."""
        if not self.is_element:
            return
        yield self
        for child in self.children:
            yield from child.iter()

    def find_by_attr(self, name: str, value: str | None = None) -> list["Element"]:
        """Find this element or descendants carrying an attribute, in document order."""
        return [
            element
            for element in self.iter()
            if element.has_attr(name)
            and (value is None or element.get_attr(name) == value)
        ]

    # -------------------------------------------------------------------------
    # Mutation

    def _own(self, node: "Element") -> "Element":
        if node.document is not self.document:
            return self.document.import_node(node)
        node.remove()
        return node

    def append_child(self, node: "Element") -> "Element":
        """Append a node, importing it when owned by another document.

        Returns:
            The appended node handle in this document.
        """
        node = self._own(node)
        node._data.parent = self.index  # noqa: SLF001
        self._data.children.append(node.index)
        return node

    def insert_before(self, node: "Element", reference: "Element") -> "Element":
        """Insert a node before one of this element's children.

        Returns:
            The inserted node handle in this document.
        """
        node = self._own(node)
        siblings = self._data.children
        position = siblings.index(reference.index)
        node._data.parent = self.index  # noqa: SLF001
        siblings.insert(position, node.index)
        return node

    def insert_sibling_before(self, node: "Element") -> "Element":
        """Insert a node right before this element.

        Raises:
            ValueError: If this element has no parent.
        """
        parent = self.parent
        if parent is None:
            msg = "Cannot insert a sibling before a detached element"
            raise ValueError(msg)
        return parent.insert_before(node, self)

    def remove(self) -> None:
        """Detach this node from its parent; a detached node is left as is."""
        parent = self._data.parent
        if parent is None:
            return
        self.document._node(parent).children.remove(self.index)  # noqa: SLF001
        self._data.parent = None

    def remove_children(self) -> None:
        for child in self.child_nodes:
            child.remove()
