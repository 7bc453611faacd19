"""Resource references embedded in source files.

A reference has the form `@<type>/[path/]name`, for example `@string/title`
or `@image/icons/logo`. Variable references resolve to text from variables
definition files; file references resolve to media files.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol, runtime_checkable

from woodc.exceptions import GrammarError
from woodc.paths import FilePath


class ResourceType(StrEnum):
    """Reference types recognized after the `@` sign."""

    STRING = "string"
    TEXT = "text"
    COLOR = "color"
    DIMEN = "dimen"
    LINK = "link"
    TIP = "tip"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    FONT = "font"
    FILE = "file"

    @property
    def is_variable(self) -> bool:
        """Whether values of this type come from variables definition files."""
        return self in _VARIABLE_TYPES

    @classmethod
    def lookup(cls, value: str) -> "ResourceType | None":
        """Return the type named by value, or None if unknown."""
        try:
            return cls(value)
        except ValueError:
            return None


_VARIABLE_TYPES = frozenset(
    {
        ResourceType.STRING,
        ResourceType.TEXT,
        ResourceType.COLOR,
        ResourceType.DIMEN,
        ResourceType.LINK,
        ResourceType.TIP,
    }
)


@dataclass(frozen=True, slots=True)
class Reference:
    """Immutable pointer to a variable or media resource.

    Attributes:
        type: Resource type.
        name: Resource name.
        path: Optional sub-path, only allowed for media references.
    """

    type: ResourceType
    name: str
    path: str | None = None

    @classmethod
    def parse(cls, value: str) -> "Reference":
        """Parse a reference body, the text following the `@` sign.

        Args:
            value: Reference text, e.g. "string/title" or "image/icons/logo".

        Returns:
            The parsed Reference.

        Raises:
            GrammarError: On unknown type, missing name, or a sub-path on a
                variable reference.
        """
        type_name, separator, rest = value.partition("/")
        resource_type = ResourceType.lookup(type_name)
        if resource_type is None:
            msg = f"Invalid reference |@{value}|. Unknown type |{type_name}|"
            raise GrammarError(msg, value=value, grammar="reference")
        if not separator or not rest or rest.endswith("/"):
            msg = f"Invalid reference |@{value}|. Missing name"
            raise GrammarError(msg, value=value, grammar="reference")

        path, _, name = rest.rpartition("/")
        if path and resource_type.is_variable:
            msg = f"Invalid reference |@{value}|. Variables do not support path"
            raise GrammarError(msg, value=value, grammar="reference")
        return cls(type=resource_type, name=name, path=path or None)

    @property
    def is_variable(self) -> bool:
        """Whether this reference points to a variable."""
        return self.type.is_variable

    def __str__(self) -> str:
        if self.path:
            return f"@{self.type}/{self.path}/{self.name}"
        return f"@{self.type}/{self.name}"


@runtime_checkable
class ReferenceHandler(Protocol):
    """Resolves one reference found in a source file to its substitution text."""

    def __call__(self, reference: Reference, source: FilePath) -> str | None:
        """Return the value of reference as seen from source, or None if missing."""
        ...
