"""Style variant reader.

Concatenates a base stylesheet with its sibling variant files, each variant
wrapped into the media query decoded from its file name:

    res/page/page.css           base, emitted first
    res/page/page_lgd.css       @media screen and ( min-width: 1200px ) { ... }
    res/page/page_w800.css      @media screen and ( max-width: 800px ) { ... }

Variants are emitted in descending weight so that narrower variants win the
cascade tie-break against broader ones.
"""

from collections.abc import Iterator
from typing import TYPE_CHECKING

from woodc.exceptions import StructureError
from woodc.paths import FilePath
from woodc.reference import ReferenceHandler
from woodc.transforms import Evaluator, resolve_text
from woodc.utils import get_logger

if TYPE_CHECKING:
    from woodc.project import Project

logger = get_logger("woodc.style")


def style_variants(project: "Project", style_file: FilePath) -> list[FilePath]:
    """List the media variants of a base stylesheet in emission order.

    Language-only variants are not media variants and are left out.

    Args:
        project: Project holding the stylesheet.
        style_file: Variant-free base stylesheet.

    Returns:
        Variant files sorted by descending weight, then by name.
    """
    variants = [
        file
        for file in project.list_files(style_file.dir)
        if file.is_style
        and file.has_basename(style_file.basename)
        and file.variants.has_media
    ]
    return sorted(variants, key=lambda file: (-file.variants.weight, file.name))


def iter_style(
    project: "Project",
    style_file: FilePath,
    handler: ReferenceHandler | None = None,
    *,
    evaluator: Evaluator | None = None,
) -> Iterator[str]:
    """Yield the merged stylesheet text chunk by chunk.

    Args:
        project: Project holding the stylesheet.
        style_file: Variant-free base stylesheet.
        handler: When given, references in every file are substituted.
        evaluator: Interpreter for `@eval` expressions.

    Yields:
        Stylesheet text chunks.

    Raises:
        StructureError: If style_file is itself a variant.
    """
    if not style_file.variants.is_empty:
        msg = f"Style reader requires a base stylesheet, got variant |{style_file}|"
        raise StructureError(msg, path=style_file.value)

    def read(file: FilePath) -> str:
        text = project.read_text(file)
        if handler is None:
            return text
        return resolve_text(text, file, handler, evaluator=evaluator)

    base = read(style_file)
    yield base
    if not base.endswith("\n"):
        yield "\n"

    for position, variant in enumerate(style_variants(project, style_file)):
        variants = variant.variants
        if position:
            yield "\n"
        yield f"@media {variants.media} and {variants.expression} {{\n\n"
        yield read(variant)
        yield "\n}\n"
        logger.debug(
            "style variant appended",
            file=variant.value,
            weight=variants.weight,
        )


def read_style(
    project: "Project",
    style_file: FilePath,
    handler: ReferenceHandler | None = None,
    *,
    evaluator: Evaluator | None = None,
) -> str:
    """Return the merged stylesheet text; see iter_style."""
    return "".join(iter_style(project, style_file, handler, evaluator=evaluator))
