"""
Designer Sessions

Holds the open designer sessions of this process. A session pairs one form
with a DesignerStore hydrated from the form's stored content; drops, property
edits and selection changes mutate the store, and save writes the serialized
layout back through FormService. A session is dirty once its layout differs
from what it last loaded or saved; selecting an element alone does not count.

Sessions live in memory only. They are dropped on close, on reopen of the
same form by the same user, and (least recently used first) when the
configured session limit is reached.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Annotated, Any
from uuid import uuid4

from fastapi import Depends

from formbuilder.config import get_settings
from formbuilder.core.auth import UserPrincipal
from formbuilder.core.exceptions import NotFound, Unauthenticated, ValidationFailed
from formbuilder.designer import (
    DesignerStore,
    DropResolver,
    deserialize,
    gesture_from_drag_end,
    lookup,
    serialize,
    validate_values,
)
from formbuilder.models.contracts.designer import DesignerSessionPublic, DragEndRequest
from formbuilder.models.contracts.elements import ElementInstance
from formbuilder.models.orm import Form
from formbuilder.services.forms import FormService

logger = logging.getLogger(__name__)


@dataclass
class DesignerSession:
    """One user's editing session on one form."""

    session_id: str
    form_id: int
    owner_id: str
    store: DesignerStore
    dirty: bool = False
    resolver: DropResolver = field(init=False)
    _last_layout: tuple[ElementInstance, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.resolver = DropResolver(self.store)
        self._last_layout = self.store.elements
        self.store.subscribe(self._mark_dirty)

    def _mark_dirty(self, store: DesignerStore) -> None:
        # Selection changes notify too but leave the layout as it was
        layout = store.elements
        if layout != self._last_layout:
            self._last_layout = layout
            self.dirty = True

    def to_public(self) -> DesignerSessionPublic:
        selected = self.store.current_selection()
        return DesignerSessionPublic(
            session_id=self.session_id,
            form_id=self.form_id,
            elements=list(self.store.elements),
            selected_element_id=selected.id if selected else None,
            dirty=self.dirty,
        )


class DesignerSessionManager:
    """
    Registry of open designer sessions.

    Every call is scoped to the current user; a session opened by someone
    else is reported as missing.
    """

    def __init__(self, max_sessions: int | None = None):
        if max_sessions is None:
            max_sessions = get_settings().max_designer_sessions
        if max_sessions < 1:
            raise ValueError(f"max_sessions must be at least 1, got {max_sessions}")
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, DesignerSession] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    async def open(
        self, forms: FormService, user: UserPrincipal | None, form_id: int
    ) -> DesignerSession:
        """
        Open a designer session on one of the user's forms.

        Raises:
            Unauthenticated: If there is no current user
            NotFound: If the form is missing or not owned
            ValidationFailed: If the form is already published
            MalformedLayout: If the stored content cannot be parsed
        """
        form = await forms.get_form(user, form_id)
        if form.published:
            raise ValidationFailed("Published forms cannot be edited")

        store = DesignerStore(deserialize(form.content))
        session = DesignerSession(
            session_id=str(uuid4()),
            form_id=form.id,
            owner_id=form.user_id,
            store=store,
        )

        for existing in list(self._sessions.values()):
            if existing.form_id == form.id and existing.owner_id == form.user_id:
                del self._sessions[existing.session_id]
                logger.info(f"Replaced designer session {existing.session_id} on form {form.id}")

        while len(self._sessions) >= self.max_sessions:
            evicted_id, _ = self._sessions.popitem(last=False)
            logger.warning(f"Designer session limit reached, evicted session {evicted_id}")

        self._sessions[session.session_id] = session
        logger.info(
            f"Opened designer session {session.session_id} on form {form.id} "
            f"with {len(store)} element(s)"
        )
        return session

    def get(self, user: UserPrincipal | None, session_id: str) -> DesignerSession:
        """
        Get an open session owned by the user.

        Raises:
            Unauthenticated: If there is no current user
            NotFound: If the session is not open or belongs to someone else
        """
        if user is None:
            raise Unauthenticated()
        session = self._sessions.get(session_id)
        if session is None or session.owner_id != user.user_id:
            raise NotFound("Designer session not found")
        self._sessions.move_to_end(session_id)
        return session

    def drop(
        self, user: UserPrincipal | None, session_id: str, event: DragEndRequest
    ) -> ElementInstance | None:
        """
        Apply a drag-end event to the session's layout.

        Returns:
            The inserted or moved element, or None if nothing changed

        Raises:
            InvalidTarget: If the event references an element not in the layout
        """
        session = self.get(user, session_id)
        gesture = gesture_from_drag_end(event.active, event.over)
        logger.debug(f"Session {session_id}: resolving {type(gesture).__name__}")
        return session.resolver.resolve(gesture)

    def update_element(
        self,
        user: UserPrincipal | None,
        session_id: str,
        element_id: str,
        changes: dict[str, Any],
    ) -> ElementInstance:
        """
        Edit an element's properties.

        Raises:
            NotFound: If the element is not in the layout
            ValidationFailed: If the edited attributes violate the variant schema
        """
        session = self.get(user, session_id)
        element = session.store.get(element_id)
        if element is None:
            raise NotFound(f"Element {element_id} not found")

        updated = lookup(element.type).update_attributes(element, changes)
        session.store.replace(element_id, updated)
        return updated

    def remove_element(
        self, user: UserPrincipal | None, session_id: str, element_id: str
    ) -> bool:
        session = self.get(user, session_id)
        return session.store.remove(element_id)

    def select(
        self, user: UserPrincipal | None, session_id: str, element_id: str | None
    ) -> ElementInstance | None:
        """
        Select an element for property editing, or clear with None.

        Raises:
            NotFound: If the element is not in the layout
        """
        session = self.get(user, session_id)
        if element_id is None:
            session.store.select(None)
            return None

        element = session.store.get(element_id)
        if element is None:
            raise NotFound(f"Element {element_id} not found")
        session.store.select(element)
        return element

    def preview_validate(
        self, user: UserPrincipal | None, session_id: str, values: dict[str, str]
    ) -> list[str]:
        """Check preview values against the session's current layout."""
        session = self.get(user, session_id)
        return validate_values(session.store.elements, values)

    async def save(
        self, forms: FormService, user: UserPrincipal | None, session_id: str
    ) -> Form:
        """Write the session's layout to its form and clear the dirty flag."""
        session = self.get(user, session_id)
        form = await forms.update_form_content(
            user, session.form_id, serialize(session.store.elements)
        )
        session.dirty = False
        return form

    def close(self, user: UserPrincipal | None, session_id: str) -> None:
        session = self.get(user, session_id)
        del self._sessions[session.session_id]
        logger.info(f"Closed designer session {session_id}")


@lru_cache
def get_session_manager() -> DesignerSessionManager:
    """Get the process-wide designer session manager."""
    return DesignerSessionManager()


SessionManagerDep = Annotated[DesignerSessionManager, Depends(get_session_manager)]
