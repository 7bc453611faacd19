"""Variables definitions and resolution."""

from ._loader import parse_definitions
from ._variables import Variables

__all__ = ["Variables", "parse_definitions"]
