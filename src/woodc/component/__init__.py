"""Component composition: templates, widgets and resource manifests."""

from ._component import (
    MAX_NESTING_LEVELS,
    Component,
    merge_attrs,
    nesting_guard,
)
from ._descriptor import (
    ComponentDescriptor,
    Declaration,
    DeclarationKind,
    parse_descriptor,
)

__all__ = [
    "MAX_NESTING_LEVELS",
    "Component",
    "ComponentDescriptor",
    "Declaration",
    "DeclarationKind",
    "merge_attrs",
    "nesting_guard",
    "parse_descriptor",
]
