"""Filename variant suffixes: language codes and media query aliases.

A variant suffix is the `_`-joined tail of a file basename, for example
`page_de_lgd.css` carries the `de` language and the `lgd` media alias.
Every token must be either a language code or an alias known to the
project's alias table, otherwise parsing fails.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from woodc.exceptions import GrammarError

# =============================================================================
# Weight Bands
# =============================================================================

# Each media dimension owns a disjoint numeric band so that the sum of the
# weights of a variant never crosses into a higher band.
DEVICE_BAND = 1_000_000
WIDTH_BAND = 100_000
HEIGHT_BAND = 10_000
ORIENTATION_BAND = 0

MAX_VIEWPORT = 9_999
DEFAULT_MEDIA = "screen"

_LANGUAGE_PATTERN = re.compile(r"^([a-z]{2})(?:-([a-z]{2}))?$", re.IGNORECASE)
_WIDTH_PATTERN = re.compile(r"^w(\d{3,4})$")
_HEIGHT_PATTERN = re.compile(r"^h(\d{3,4})$")


@dataclass(frozen=True, slots=True)
class MediaAlias:
    """A media query definition selected by a filename alias.

    Attributes:
        alias: The alias token used in file names (e.g., "lgd", "w800").
        expression: CSS media feature expression (e.g., "min-width: 1200px").
        weight: Rank used to order sibling style variants.
        media: CSS media type the expression applies to.
    """

    alias: str
    expression: str
    weight: int
    media: str = DEFAULT_MEDIA


DEFAULT_ALIASES: tuple[MediaAlias, ...] = (
    # Screen classes, from large desktop down to extra small device
    MediaAlias("lgd", "min-width: 1200px", DEVICE_BAND + 1),
    MediaAlias("nod", "max-width: 1199px", DEVICE_BAND + 2),
    MediaAlias("mdd", "max-width: 991px", DEVICE_BAND + 3),
    MediaAlias("smd", "max-width: 767px", DEVICE_BAND + 4),
    MediaAlias("xsd", "max-width: 559px", DEVICE_BAND + 5),
    MediaAlias("landscape", "orientation: landscape", ORIENTATION_BAND + 1),
    MediaAlias("portrait", "orientation: portrait", ORIENTATION_BAND + 2),
)


@dataclass(frozen=True, slots=True)
class AliasTable:
    """Lookup table from alias token to media query definition.

    Explicit entries take precedence over the `w<px>` and `h<px>` viewport
    patterns, which are always recognized.
    """

    aliases: Mapping[str, MediaAlias] = field(default_factory=dict)

    @classmethod
    def from_aliases(cls, aliases: Iterable[MediaAlias]) -> "AliasTable":
        """Build a table from alias definitions; later definitions win.

        Args:
            aliases: Media alias definitions.

        Returns:
            A new AliasTable.
        """
        return cls(aliases={alias.alias: alias for alias in aliases})

    @classmethod
    def default(cls) -> "AliasTable":
        """Return the built-in alias table."""
        return cls.from_aliases(DEFAULT_ALIASES)

    def extend(self, aliases: Iterable[MediaAlias]) -> "AliasTable":
        """Return a copy of this table with additional or overriding aliases."""
        return AliasTable.from_aliases([*self.aliases.values(), *aliases])

    def get(self, token: str) -> MediaAlias | None:
        """Resolve an alias token.

        Args:
            token: The alias token from a file name.

        Returns:
            The media alias, or None if the token is not an alias.
        """
        alias = self.aliases.get(token)
        if alias is not None:
            return alias

        match = _WIDTH_PATTERN.match(token)
        if match:
            width = int(match.group(1))
            return MediaAlias(
                token, f"max-width: {width}px", WIDTH_BAND + MAX_VIEWPORT - width
            )

        match = _HEIGHT_PATTERN.match(token)
        if match:
            height = int(match.group(1))
            return MediaAlias(
                token, f"max-height: {height}px", HEIGHT_BAND + MAX_VIEWPORT - height
            )

        return None


_DEFAULT_TABLE = AliasTable.default()


def default_alias_table() -> AliasTable:
    """Return the shared built-in alias table."""
    return _DEFAULT_TABLE


def parse_language(token: str) -> str | None:
    """Normalize a language token, or return None if it is not one.

    Args:
        token: Candidate language token (e.g., "de", "de-at").

    Returns:
        Normalized language code (e.g., "de-AT"), or None.
    """
    match = _LANGUAGE_PATTERN.match(token)
    if match is None:
        return None
    language = match.group(1).lower()
    region = match.group(2)
    return f"{language}-{region.upper()}" if region else language


@dataclass(frozen=True, slots=True)
class Variants:
    """Decoded variant suffix of a file name.

    Attributes:
        language: Normalized language code, or None for the default language.
        medias: Media aliases in declaration order.
    """

    language: str | None = None
    medias: tuple[MediaAlias, ...] = ()

    @classmethod
    def parse(cls, suffix: str | None, aliases: AliasTable | None = None) -> "Variants":
        """Parse a `_`-joined variant suffix.

        Args:
            suffix: The suffix without the leading underscore, or None.
            aliases: Alias table used to recognize media tokens.

        Returns:
            The decoded Variants; empty when suffix is None or empty.

        Raises:
            GrammarError: On a second language token, a repeated alias or an
                unrecognized token.
        """
        if not suffix:
            return cls()
        table = aliases if aliases is not None else _DEFAULT_TABLE

        language: str | None = None
        medias: list[MediaAlias] = []
        for token in suffix.split("_"):
            code = parse_language(token)
            if code is not None:
                if language is not None:
                    msg = f"Multiple language variants in |{suffix}|"
                    raise GrammarError(msg, value=suffix, grammar="variant")
                language = code
                continue

            alias = table.get(token)
            if alias is None:
                msg = f"Not recognized variant |{token}| in |{suffix}|"
                raise GrammarError(msg, value=suffix, grammar="variant")
            if any(media.alias == alias.alias for media in medias):
                msg = f"Media query definition override for alias |{token}|"
                raise GrammarError(msg, value=suffix, grammar="variant")
            medias.append(alias)

        return cls(language=language, medias=tuple(medias))

    @property
    def is_empty(self) -> bool:
        """Whether the suffix carried neither a language nor a media alias."""
        return self.language is None and not self.medias

    @property
    def has_media(self) -> bool:
        """Whether at least one media alias is present."""
        return bool(self.medias)

    @property
    def weight(self) -> int:
        """Sum of the media alias weights; language contributes nothing."""
        return sum(media.weight for media in self.medias)

    @property
    def media(self) -> str:
        """CSS media type shared by all aliases, or "all" when they differ."""
        types = {media.media for media in self.medias}
        return types.pop() if len(types) == 1 else "all"

    @property
    def expression(self) -> str:
        """Media features joined with `and`, each wrapped in parentheses."""
        return " and ".join(f"( {media.expression} )" for media in self.medias)

    def has_language(self, language: str | None) -> bool:
        """Check whether this variant targets the given language.

        Args:
            language: Language code; None matches only language-less files.
        """
        if language is None:
            return self.language is None
        return self.language == parse_language(language)
