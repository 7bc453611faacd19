"""Style variant reader."""

from ._reader import iter_style, read_style, style_variants

__all__ = ["iter_style", "read_style", "style_variants"]
