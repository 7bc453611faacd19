"""Variables definition file parsing.

A definition file has the resource type as root tag and one child per
variable, the child tag being the variable name:

    <string>
        <title>Page title</title>
    </string>

Only `text` variables may contain nested markup, which is kept verbatim.
XML files whose root is not a variable type are not definition files.
"""

import xml.etree.ElementTree as ET

from woodc.exceptions import StructureError
from woodc.reference import Reference, ResourceType


def _inner_markup(element: ET.Element) -> str:
    parts = [element.text or ""]
    parts.extend(ET.tostring(child, encoding="unicode") for child in element)
    return "".join(parts)


def parse_definitions(text: str, source: str) -> dict[Reference, str] | None:
    """Parse variables definitions.

    Args:
        text: Definition file content.
        source: Definition file path, for error messages.

    Returns:
        Values by reference, or None if the file is not a variables
        definition.

    Raises:
        StructureError: If the XML is malformed or a non-text variable
            contains nested elements.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        msg = f"Invalid variables definition |{source}|: {e}"
        raise StructureError(msg, path=source) from e

    resource_type = ResourceType.lookup(str(root.tag))
    if resource_type is None or not resource_type.is_variable:
        return None

    values: dict[Reference, str] = {}
    for child in root:
        if resource_type is ResourceType.TEXT:
            value = _inner_markup(child)
        else:
            if len(child):
                msg = (
                    f"Not allowed nested element |{child[0].tag}| in file |{source}|. "
                    "Only text variables support nested elements"
                )
                raise StructureError(msg, path=source)
            value = child.text or ""
        values[Reference(type=resource_type, name=str(child.tag))] = value.strip()
    return values
