"""Layout parameters supplied by a `param` operator."""

from xml.sax.saxutils import escape

from woodc.exceptions import GrammarError

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


class LayoutParameters:
    """Named values consumed by `@param/name` references of one layout.

    Parameters are declared as `name:value;name2:value2`. Values are XML
    escaped since they are substituted into markup.
    """

    __slots__ = ("_values",)

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(values or {})

    def reload(self, declaration: str | None) -> None:
        """Replace the parameters with those of a declaration.

        Args:
            declaration: Parameters declaration; None keeps current values.

        Raises:
            GrammarError: If an entry has no `:` separator or an empty name.
        """
        if declaration is None:
            return
        self._values.clear()
        for entry in declaration.split(";"):
            if not entry.strip():
                continue
            name, separator, value = entry.partition(":")
            name = name.strip()
            if not separator or not name:
                msg = f"Invalid layout parameters |{declaration}|"
                raise GrammarError(msg, value=declaration, grammar="parameters")
            self._values[name] = escape(value.strip(), _XML_ENTITIES)

    def get(self, name: str) -> str | None:
        """Return the parameter value, or None if not declared."""
        return self._values.get(name)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"LayoutParameters({self._values!r})"
