"""
Designer State Store

Ordered collection of element instances plus the current selection for one
designer session. Mutation methods are the only write path; every mutation
notifies subscribed listeners.
"""

import logging
from typing import Callable, Iterable

from formbuilder.models.contracts.elements import ElementInstance

logger = logging.getLogger(__name__)

Listener = Callable[["DesignerStore"], None]


class DesignerStore:
    """
    Session-scoped layout state.

    The store is handed by reference to whatever needs it (the drop resolver,
    the session manager); there is no module-level instance.

    Example usage:
        store = DesignerStore()
        store.insert(0, lookup(ElementType.TITLE_FIELD).construct("t1"))
        store.select(store.get("t1"))
    """

    def __init__(self, elements: Iterable[ElementInstance] = ()):
        self._elements: list[ElementInstance] = list(elements)
        self._selected_id: str | None = None
        self._listeners: list[Listener] = []

    # ==================== READS ====================

    @property
    def elements(self) -> tuple[ElementInstance, ...]:
        """Snapshot of the layout in order."""
        return tuple(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def index_of(self, element_id: str) -> int | None:
        """Position of the element with ``element_id``, or None."""
        for index, element in enumerate(self._elements):
            if element.id == element_id:
                return index
        return None

    def get(self, element_id: str) -> ElementInstance | None:
        index = self.index_of(element_id)
        return None if index is None else self._elements[index]

    def current_selection(self) -> ElementInstance | None:
        """
        Get the selected element.

        Selection is held by id, so a replaced element resolves to its
        replacement and a removed element resolves to None.
        """
        if self._selected_id is None:
            return None
        return self.get(self._selected_id)

    # ==================== MUTATIONS ====================

    def insert(self, index: int, instance: ElementInstance) -> None:
        """
        Insert ``instance`` at ``index``, shifting later elements right.

        The index is clamped to [0, len]. Id uniqueness is the caller's job.
        """
        index = max(0, min(index, len(self._elements)))
        self._elements.insert(index, instance)
        logger.debug(f"Inserted {instance.type.value} {instance.id} at {index}")
        self._notify()

    def replace(self, element_id: str, instance: ElementInstance) -> bool:
        """
        Replace the element with ``element_id`` in place.

        Unknown ids are ignored.

        Returns:
            True if an element was replaced
        """
        index = self.index_of(element_id)
        if index is None:
            logger.debug(f"Ignoring replace for unknown element {element_id}")
            return False
        self._elements[index] = instance
        if self._selected_id == element_id:
            self._selected_id = instance.id
        logger.debug(f"Replaced element {element_id} at {index}")
        self._notify()
        return True

    def remove(self, element_id: str) -> bool:
        """
        Remove the element with ``element_id``; unknown ids are ignored.

        Returns:
            True if an element was removed
        """
        remaining = [element for element in self._elements if element.id != element_id]
        if len(remaining) == len(self._elements):
            return False
        self._elements = remaining
        if self._selected_id == element_id:
            self._selected_id = None
        logger.debug(f"Removed element {element_id}")
        self._notify()
        return True

    def select(self, instance: ElementInstance | None) -> None:
        """Set (or clear, with None) the element selected for property editing."""
        self._selected_id = instance.id if instance is not None else None
        self._notify()

    def load(self, elements: Iterable[ElementInstance]) -> None:
        """Replace the whole layout, e.g. when hydrating from saved content."""
        self._elements = list(elements)
        self._selected_id = None
        self._notify()

    # ==================== OBSERVERS ====================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called after every mutation.

        Returns:
            Callable that unsubscribes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
