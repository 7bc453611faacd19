"""Source tree addresses: directories, files, components and editables.

All paths are immutable values relative to the project root. Equality is by
normalized string value; parsing a normalized value yields an equal path.
Filesystem queries go through the owning project, never through the path.
"""

import re
from dataclasses import dataclass, field
from enum import StrEnum

from woodc.exceptions import GrammarError

from ._variants import AliasTable, Variants

SOURCE_ROOTS = frozenset({"res", "lib", "script", "gen"})

_DIR_PATTERN = re.compile(r"^[a-z]+(?:/\.?[a-z0-9-]+)*/?$")
_FILE_PATTERN = re.compile(
    r"^((?:[a-z]+)/(?:\.?[a-z0-9-]+/)*)([a-z0-9-.]+?)(?:_([a-z0-9][a-z0-9-_]*))?\.([a-z0-9]{2,5})$"
)
_COMPO_PATTERN = re.compile(r"^([a-z]+(?:/[a-z0-9-]+)+)/?$")
_EDITABLE_PATTERN = re.compile(r"^([^#]+)#([\w-]+)$")


class FileType(StrEnum):
    """Source file kinds, derived from extension and location."""

    LAYOUT = "layout"
    STYLE = "style"
    SCRIPT = "script"
    DESCRIPTOR = "descriptor"
    VARIABLES = "variables"
    MEDIA = "media"


_EXTENSION_TYPES: dict[str, FileType] = {
    "htm": FileType.LAYOUT,
    "css": FileType.STYLE,
    "js": FileType.SCRIPT,
}

LAYOUT_EXTENSION = "htm"


def _check_root(value: str, root: str, grammar: str) -> None:
    if root not in SOURCE_ROOTS:
        msg = f"Invalid {grammar} |{value}|. Root |{root}| is not a source directory"
        raise GrammarError(msg, value=value, grammar=grammar)


@dataclass(frozen=True, slots=True)
class DirPath:
    """A source directory rooted at one of the project source roots.

    Attributes:
        segments: Path segments, the first being the source root.
    """

    segments: tuple[str, ...]

    @classmethod
    def parse(cls, value: str) -> "DirPath":
        """Parse a directory path string.

        Args:
            value: Directory path, with or without trailing slash.

        Returns:
            The parsed DirPath.

        Raises:
            GrammarError: If the value violates the directory grammar.
        """
        if not _DIR_PATTERN.match(value):
            msg = f"Invalid directory path |{value}|"
            raise GrammarError(msg, value=value, grammar="directory")
        segments = tuple(value.rstrip("/").split("/"))
        _check_root(value, segments[0], "directory")
        return cls(segments=segments)

    @property
    def value(self) -> str:
        """Normalized value, always ending with a slash."""
        return "/".join(self.segments) + "/"

    @property
    def name(self) -> str:
        """Last path segment."""
        return self.segments[-1]

    @property
    def root(self) -> str:
        """Source root segment."""
        return self.segments[0]

    @property
    def parent(self) -> "DirPath | None":
        """Parent directory, or None for a source root."""
        if len(self.segments) == 1:
            return None
        return DirPath(segments=self.segments[:-1])

    def subdir(self, path: str) -> "DirPath":
        """Return a descendant directory.

        Args:
            path: Relative path, one or more segments.
        """
        return DirPath.parse(self.value + path.strip("/"))

    def file(self, name: str, aliases: AliasTable | None = None) -> "FilePath":
        """Return the path of a file in this directory.

        Args:
            name: File name including extension.
            aliases: Alias table used to decode the variant suffix.
        """
        return FilePath.parse(self.value + name, aliases)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class FilePath:
    """A source file: directory, basename, optional variants and extension.

    Attributes:
        dir: Containing directory.
        basename: File name without variants and extension.
        extension: File extension without the dot.
        variant: Raw variant suffix, or None.
        variants: Decoded variants.
    """

    dir: DirPath
    basename: str
    extension: str
    variant: str | None = None
    variants: Variants = field(default_factory=Variants, compare=False)

    @classmethod
    def parse(cls, value: str, aliases: AliasTable | None = None) -> "FilePath":
        """Parse a file path string.

        Args:
            value: File path relative to the project root.
            aliases: Alias table used to decode the variant suffix.

        Returns:
            The parsed FilePath.

        Raises:
            GrammarError: If the value violates the file grammar or carries
                an unrecognized variant.
        """
        match = _FILE_PATTERN.match(value)
        if match is None:
            msg = f"Invalid file path |{value}|"
            raise GrammarError(msg, value=value, grammar="file")
        dir_value, basename, variant, extension = match.groups()
        directory = DirPath.parse(dir_value)
        return cls(
            dir=directory,
            basename=basename,
            extension=extension,
            variant=variant,
            variants=Variants.parse(variant, aliases),
        )

    @property
    def value(self) -> str:
        """Normalized value relative to the project root."""
        return self.dir.value + self.name

    @property
    def name(self) -> str:
        """File name including variants and extension."""
        suffix = f"_{self.variant}" if self.variant else ""
        return f"{self.basename}{suffix}.{self.extension}"

    @property
    def type(self) -> FileType:
        """File type; XML files named after their directory are descriptors."""
        if self.extension == "xml":
            if self.basename == self.dir.name:
                return FileType.DESCRIPTOR
            return FileType.VARIABLES
        return _EXTENSION_TYPES.get(self.extension, FileType.MEDIA)

    @property
    def is_layout(self) -> bool:
        return self.type is FileType.LAYOUT

    @property
    def is_style(self) -> bool:
        return self.type is FileType.STYLE

    @property
    def is_media(self) -> bool:
        return self.type is FileType.MEDIA

    def has_basename(self, basename: str) -> bool:
        """Check the basename, ignoring variants and extension."""
        return self.basename == basename

    def sibling(self, extension: str) -> "FilePath":
        """Return the variant-free sibling with another extension."""
        return FilePath(dir=self.dir, basename=self.basename, extension=extension)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class CompoPath:
    """Address of a component in the source tree.

    Resolves to `<path>/<name>.htm` when the component has its own directory,
    otherwise to the inline layout `<path>.htm`.

    Attributes:
        value: Normalized component path without trailing slash.
    """

    value: str

    @classmethod
    def parse(cls, value: str) -> "CompoPath":
        """Parse a component path string.

        Raises:
            GrammarError: If the value violates the component grammar.
        """
        match = _COMPO_PATTERN.match(value.strip())
        if match is None:
            msg = f"Invalid component path |{value}|"
            raise GrammarError(msg, value=value, grammar="component")
        normalized = match.group(1)
        _check_root(value, normalized.split("/", 1)[0], "component")
        return cls(value=normalized)

    @property
    def name(self) -> str:
        """Component name, the last path segment."""
        return self.value.rsplit("/", 1)[-1]

    @property
    def dir(self) -> DirPath:
        """Component directory."""
        return DirPath.parse(self.value)

    def layout_candidates(self) -> tuple[FilePath, FilePath]:
        """Return the directory layout and the inline layout, in lookup order."""
        name = self.name
        parent, _, _ = self.value.rpartition("/")
        return (
            FilePath(dir=self.dir, basename=name, extension=LAYOUT_EXTENSION),
            FilePath(
                dir=DirPath.parse(parent), basename=name, extension=LAYOUT_EXTENSION
            ),
        )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class EditablePath:
    """Template reference with an optional editable name: `compo[#editable]`.

    Attributes:
        compo: Template component path.
        editable: Editable name, or None when the template has a sole editable.
    """

    compo: CompoPath
    editable: str | None = None

    @classmethod
    def parse(cls, value: str) -> "EditablePath":
        """Parse a template reference.

        Raises:
            GrammarError: If either part is malformed.
        """
        match = _EDITABLE_PATTERN.match(value.strip())
        if match is None:
            if "#" in value:
                msg = f"Invalid editable path |{value}|"
                raise GrammarError(msg, value=value, grammar="editable")
            return cls(compo=CompoPath.parse(value))
        return cls(compo=CompoPath.parse(match.group(1)), editable=match.group(2))

    @property
    def value(self) -> str:
        """Normalized value."""
        if self.editable is None:
            return self.compo.value
        return f"{self.compo.value}#{self.editable}"

    def __str__(self) -> str:
        return self.value
