"""
Layout Serializer

Converts a layout to and from the JSON text stored as a form's content and
read by the public submission page. The wire format is a JSON array of
``{"id": str, "type": str, "extraAttributes": object}`` in layout order.
"""

from typing import Sequence

from pydantic import TypeAdapter, ValidationError

from formbuilder.core.exceptions import MalformedLayout
from formbuilder.models.contracts.elements import ElementInstance

_layout_adapter = TypeAdapter(list[ElementInstance])

EMPTY_LAYOUT = "[]"


def serialize(layout: Sequence[ElementInstance]) -> str:
    """
    Encode a layout as compact JSON.

    Output is deterministic: same layout, same text.
    """
    return _layout_adapter.dump_json(list(layout), by_alias=True).decode("utf-8")


def deserialize(text: str | bytes) -> list[ElementInstance]:
    """
    Parse stored content back into a layout.

    Raises:
        MalformedLayout: If the text is not a JSON array of valid elements,
            an element has an unregistered type, it carries attributes
            outside its variant's declared set, or two elements share an id
    """
    try:
        layout = _layout_adapter.validate_json(text)
    except ValidationError as e:
        raise MalformedLayout(f"Form content is not a valid layout: {e.error_count()} error(s)") from e

    seen: set[str] = set()
    for element in layout:
        if element.id in seen:
            raise MalformedLayout(f"Form content repeats element id {element.id!r}")
        seen.add(element.id)
    return layout
