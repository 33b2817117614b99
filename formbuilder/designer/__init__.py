"""
Designer core: element variants, layout state, drag-and-drop and serialization.

    from formbuilder.designer import DesignerStore, DropResolver, lookup, serialize
"""

from formbuilder.designer.dnd import (
    DragGesture,
    DropResolver,
    ElementOverElementHalf,
    PaletteOverCanvas,
    PaletteOverElementHalf,
    Unmatched,
    gesture_from_drag_end,
)
from formbuilder.designer.registry import ELEMENT_VARIANTS, lookup, palette
from formbuilder.designer.serializer import EMPTY_LAYOUT, deserialize, serialize
from formbuilder.designer.store import DesignerStore
from formbuilder.designer.validation import validate_value, validate_values
from formbuilder.designer.variants import ElementVariant

__all__ = [
    "DesignerStore",
    "DragGesture",
    "DropResolver",
    "ELEMENT_VARIANTS",
    "EMPTY_LAYOUT",
    "ElementOverElementHalf",
    "ElementVariant",
    "PaletteOverCanvas",
    "PaletteOverElementHalf",
    "Unmatched",
    "deserialize",
    "gesture_from_drag_end",
    "lookup",
    "palette",
    "serialize",
    "validate_value",
    "validate_values",
]
