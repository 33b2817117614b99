"""
Drag-and-Drop Resolver

Turns one drag-end event into at most one layout mutation.

The drag layer attaches loosely-typed data to the dragged node and to the
drop target. gesture_from_drag_end() classifies that data into one of four
explicit gestures, and DropResolver applies the gesture to a DesignerStore:

    PaletteOverCanvas        -> new element appended to the layout
    PaletteOverElementHalf   -> new element inserted before/after the target
    ElementOverElementHalf   -> existing element moved before/after the target
    Unmatched                -> nothing happens

"Top half" means insert before the target, "bottom half" means after it.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Union

from formbuilder.core.exceptions import InvalidTarget
from formbuilder.designer.registry import lookup
from formbuilder.designer.store import DesignerStore
from formbuilder.models.contracts.base import generate_element_id
from formbuilder.models.contracts.designer import DragSourceData, DropTargetData
from formbuilder.models.contracts.elements import ElementInstance
from formbuilder.models.enums import DropHalf, ElementType

logger = logging.getLogger(__name__)


# ==================== GESTURES ====================


@dataclass(frozen=True)
class PaletteOverCanvas:
    """A palette button released over the canvas container."""
    element_type: ElementType


@dataclass(frozen=True)
class PaletteOverElementHalf:
    """A palette button released over one half of an existing element."""
    element_type: ElementType
    target_id: str
    half: DropHalf


@dataclass(frozen=True)
class ElementOverElementHalf:
    """An existing element released over one half of another element."""
    source_id: str
    target_id: str
    half: DropHalf


@dataclass(frozen=True)
class Unmatched:
    """Cancelled drag or a drop outside any recognized target."""


DragGesture = Union[PaletteOverCanvas, PaletteOverElementHalf, ElementOverElementHalf, Unmatched]


def _target_half(over: DropTargetData) -> DropHalf | None:
    if over.is_top_half_designer_element:
        return DropHalf.TOP
    if over.is_bottom_half_designer_element:
        return DropHalf.BOTTOM
    return None


def gesture_from_drag_end(
    active: DragSourceData | None, over: DropTargetData | None
) -> DragGesture:
    """
    Classify drag-end payloads into a gesture.

    Scenarios are checked in priority order; the first match wins.

    Args:
        active: Data attached to the dragged node (None if the drag was cancelled)
        over: Data attached to the drop target (None if dropped on nothing)

    Returns:
        The matching gesture, or Unmatched
    """
    if active is None or over is None:
        return Unmatched()

    half = _target_half(over)

    if active.is_designer_btn_element and active.type is not None:
        if over.is_designer_drop_area:
            return PaletteOverCanvas(element_type=active.type)
        if half is not None and over.element_id:
            return PaletteOverElementHalf(
                element_type=active.type, target_id=over.element_id, half=half
            )

    if active.is_designer_element and active.element_id and half is not None and over.element_id:
        return ElementOverElementHalf(
            source_id=active.element_id, target_id=over.element_id, half=half
        )

    return Unmatched()


# ==================== RESOLVER ====================


class DropResolver:
    """
    Applies drag gestures to a designer store.

    Args:
        store: Layout to mutate
        id_factory: Mints ids for new elements (uuid4 by default)
    """

    def __init__(
        self,
        store: DesignerStore,
        id_factory: Callable[[], str] = generate_element_id,
    ):
        self.store = store
        self.id_factory = id_factory

    def resolve(self, gesture: DragGesture) -> ElementInstance | None:
        """
        Apply a gesture.

        Returns:
            The inserted or moved element, or None when nothing changed

        Raises:
            InvalidTarget: If a referenced element id is not in the layout.
                The layout is left unchanged.
        """
        if isinstance(gesture, PaletteOverCanvas):
            element = lookup(gesture.element_type).construct(self.id_factory())
            self.store.insert(len(self.store), element)
            return element

        if isinstance(gesture, PaletteOverElementHalf):
            target_index = self._require_index(gesture.target_id)
            element = lookup(gesture.element_type).construct(self.id_factory())
            self.store.insert(self._offset(target_index, gesture.half), element)
            return element

        if isinstance(gesture, ElementOverElementHalf):
            return self._move(gesture)

        if isinstance(gesture, Unmatched):
            return None

        raise TypeError(f"Unsupported drag gesture: {gesture!r}")

    def _move(self, gesture: ElementOverElementHalf) -> ElementInstance | None:
        source_index = self._require_index(gesture.source_id)
        self._require_index(gesture.target_id)

        if gesture.source_id == gesture.target_id:
            # Dropping an element onto itself keeps its position
            return None

        element = self.store.elements[source_index]
        selected = self.store.current_selection()
        self.store.remove(gesture.source_id)

        # Indices after the source shifted left by one
        target_index = self.store.index_of(gesture.target_id)
        assert target_index is not None
        self.store.insert(self._offset(target_index, gesture.half), element)

        # A move is not a removal as far as the selection is concerned
        if selected is not None and selected.id == element.id:
            self.store.select(element)
        return element

    def _require_index(self, element_id: str) -> int:
        index = self.store.index_of(element_id)
        if index is None:
            logger.warning(f"Drop referenced element {element_id} which is not in the layout")
            raise InvalidTarget(f"Element {element_id} is not in the layout")
        return index

    @staticmethod
    def _offset(index: int, half: DropHalf) -> int:
        return index + 1 if half == DropHalf.BOTTOM else index
