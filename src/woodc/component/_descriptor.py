"""Component descriptor: display texts and meta/link/script declarations.

A descriptor is the XML file sharing the component layout basename:

    <compo>
        <display>Index Page</display>
        <meta name="description" content="@string/description" />
        <link href="https://fonts.googleapis.com/css?family=Roboto" />
        <script src="script/index.js" />
        <script-defer>false</script-defer>
    </compo>

`link-<attr>` and `script-<attr>` elements supply default attribute values
for every link or script declaration of the descriptor.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TypeVar

from woodc.dom import Document, parse_document
from woodc.exceptions import StructureError


class DeclarationKind(StrEnum):
    """Kinds of page header declarations."""

    META = "meta"
    LINK = "link"
    SCRIPT = "script"


# Identity attribute per declaration kind; None means all attributes.
_KEY_ATTRIBUTE: dict[DeclarationKind, str | None] = {
    DeclarationKind.META: None,
    DeclarationKind.LINK: "href",
    DeclarationKind.SCRIPT: "src",
}

_DEFAULTS: dict[DeclarationKind, dict[str, str]] = {
    DeclarationKind.META: {},
    DeclarationKind.LINK: {"rel": "stylesheet", "type": "text/css"},
    DeclarationKind.SCRIPT: {"type": "text/javascript", "defer": "true"},
}


@dataclass(frozen=True, slots=True)
class Declaration:
    """A meta, link or script declaration for the page header.

    Declarations are equal when they have the same kind and key: the `href`
    of a link, the `src` of a script, all attributes of a meta.

    Attributes:
        kind: Declaration kind.
        key: Identity of the declaration within its kind.
        attrs: Attributes in declaration order.
    """

    kind: DeclarationKind
    key: str
    attrs: tuple[tuple[str, str], ...] = field(compare=False)

    def get(self, name: str) -> str | None:
        """Return an attribute value, or None."""
        for attr, value in self.attrs:
            if attr == name:
                return value
        return None

    def as_dict(self) -> dict[str, str]:
        return dict(self.attrs)

    @property
    def is_embedded(self) -> bool:
        """Whether a script is to be embedded into the page rather than linked."""
        return self.get("embedded") == "true"


@dataclass(frozen=True, slots=True)
class ComponentDescriptor:
    """Parsed component descriptor.

    Attributes:
        display: Display name, or None.
        description: Description, or None.
        security_role: Security role, or None.
        version: Version, or None.
        metas: Meta declarations.
        links: Link declarations.
        scripts: Script declarations.
    """

    display: str | None = None
    description: str | None = None
    security_role: str | None = None
    version: str | None = None
    metas: tuple[Declaration, ...] = ()
    links: tuple[Declaration, ...] = ()
    scripts: tuple[Declaration, ...] = ()


def _text(document: Document, tag: str) -> str | None:
    elements = document.find_by_tag(tag)
    if not elements:
        return None
    return elements[0].text.strip() or None


def _declarations(
    document: Document, kind: DeclarationKind, source: str
) -> tuple[Declaration, ...]:
    defaults = dict(_DEFAULTS[kind])
    prefix = f"{kind}-"
    for element in document.root.iter():
        if element.tag.startswith(prefix):
            defaults[element.tag[len(prefix) :]] = element.text.strip()

    declarations: list[Declaration] = []
    key_attribute = _KEY_ATTRIBUTE[kind]
    for element in document.find_by_tag(str(kind)):
        attrs = element.attrs
        if key_attribute is not None and not attrs.get(key_attribute):
            msg = f"Missing |{key_attribute}| on {kind} declaration in |{source}|"
            raise StructureError(msg, path=source)
        for name, value in defaults.items():
            attrs.setdefault(name, value)
        if key_attribute is None:
            key = ";".join(f"{k}={v}" for k, v in sorted(attrs.items()))
        else:
            key = attrs[key_attribute]
        declaration = Declaration(kind=kind, key=key, attrs=tuple(attrs.items()))
        if declaration in declarations:
            msg = f"Duplicate {kind} |{key}| in descriptor |{source}|"
            raise StructureError(msg, path=source)
        declarations.append(declaration)
    return tuple(declarations)


def parse_descriptor(text: str, source: str) -> ComponentDescriptor:
    """Parse descriptor text, with references already substituted.

    Args:
        text: Descriptor content.
        source: Descriptor file path, for error messages.

    Returns:
        The ComponentDescriptor.

    Raises:
        StructureError: On malformed XML, a declaration lacking its key
            attribute, or duplicate declarations.
    """
    document = parse_document(text, source)
    return ComponentDescriptor(
        display=_text(document, "display"),
        description=_text(document, "description"),
        security_role=_text(document, "security-role"),
        version=_text(document, "version"),
        metas=_declarations(document, DeclarationKind.META, source),
        links=_declarations(document, DeclarationKind.LINK, source),
        scripts=_declarations(document, DeclarationKind.SCRIPT, source),
    )


T = TypeVar("T")


def add_all(target: list[T], items: Iterable[T]) -> None:
    """Append items not yet present, preserving first-seen order."""
    for item in items:
        if item not in target:
            target.append(item)
