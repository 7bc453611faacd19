"""Source tree addressing and filename variants.

Example:
    >>> from woodc.paths import FilePath
    >>> path = FilePath.parse("res/page/page_lgd.css")
    >>> path.type, path.variants.weight > 0
    (<FileType.STYLE: 'style'>, True)
"""

from ._path import (
    LAYOUT_EXTENSION,
    SOURCE_ROOTS,
    CompoPath,
    DirPath,
    EditablePath,
    FilePath,
    FileType,
)
from ._variants import (
    DEFAULT_ALIASES,
    DEFAULT_MEDIA,
    DEVICE_BAND,
    HEIGHT_BAND,
    ORIENTATION_BAND,
    WIDTH_BAND,
    AliasTable,
    MediaAlias,
    Variants,
    default_alias_table,
    parse_language,
)

__all__ = [
    "DEFAULT_ALIASES",
    "DEFAULT_MEDIA",
    "DEVICE_BAND",
    "HEIGHT_BAND",
    "LAYOUT_EXTENSION",
    "ORIENTATION_BAND",
    "SOURCE_ROOTS",
    "WIDTH_BAND",
    "AliasTable",
    "CompoPath",
    "DirPath",
    "EditablePath",
    "FilePath",
    "FileType",
    "MediaAlias",
    "Variants",
    "default_alias_table",
    "parse_language",
]
