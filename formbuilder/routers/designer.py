"""
Designer Router

Designer session endpoints. A session is opened on one of the user's
unpublished forms, edited through drops, property edits and selection
changes, and written back to the form on save.

Every call returns the session state so the client can re-render from it.
"""

import logging

from fastapi import APIRouter, HTTPException, status

from formbuilder.core.auth import CurrentUserOptional
from formbuilder.core.exceptions import (
    FormBuilderError,
    InvalidTarget,
    MalformedLayout,
    NotFound,
    Unauthenticated,
    ValidationFailed,
)
from formbuilder.models.contracts.designer import (
    DesignerSessionPublic,
    DragEndRequest,
    DropResponse,
    ElementUpdateRequest,
    PreviewValidateRequest,
    PreviewValidateResponse,
    SelectionRequest,
)
from formbuilder.models.contracts.forms import FormPublic
from formbuilder.services.designer_sessions import SessionManagerDep
from formbuilder.services.forms import FormServiceDep

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Designer"])


def _http_error(e: FormBuilderError) -> HTTPException:
    """Map a domain error raised during a designer call to an HTTP error."""
    if isinstance(e, Unauthenticated):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    if isinstance(e, NotFound):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    if isinstance(e, ValidationFailed):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": e.message, "invalid_fields": e.invalid_fields},
        )
    if isinstance(e, InvalidTarget):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    if isinstance(e, MalformedLayout):
        # Stored content the designer cannot load
        logger.error(f"Designer could not load form content: {e.message}")
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)
    logger.error(f"Unexpected designer error: {e.message}")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)


@router.post(
    "/api/forms/{form_id}/designer",
    response_model=DesignerSessionPublic,
    status_code=status.HTTP_201_CREATED,
    summary="Open a designer session",
    description="Load the form's layout into a new designer session, replacing any "
    "session the user already has open on this form",
)
async def open_designer(
    form_id: int,
    forms: FormServiceDep,
    sessions: SessionManagerDep,
    user: CurrentUserOptional,
) -> DesignerSessionPublic:
    try:
        session = await sessions.open(forms, user, form_id)
    except FormBuilderError as e:
        raise _http_error(e)
    return session.to_public()


@router.get(
    "/api/designer/{session_id}",
    response_model=DesignerSessionPublic,
    summary="Get designer session state",
)
async def get_designer(
    session_id: str, sessions: SessionManagerDep, user: CurrentUserOptional
) -> DesignerSessionPublic:
    try:
        return sessions.get(user, session_id).to_public()
    except FormBuilderError as e:
        raise _http_error(e)


@router.post(
    "/api/designer/{session_id}/drop",
    response_model=DropResponse,
    summary="Apply a drag-end event",
    description="Insert a palette element or move an existing one. "
    "Cancelled or unrecognized drops leave the layout unchanged.",
)
async def drop(
    session_id: str,
    request: DragEndRequest,
    sessions: SessionManagerDep,
    user: CurrentUserOptional,
) -> DropResponse:
    try:
        element = sessions.drop(user, session_id, request)
        return DropResponse(element=element, session=sessions.get(user, session_id).to_public())
    except FormBuilderError as e:
        raise _http_error(e)


@router.put(
    "/api/designer/{session_id}/elements/{element_id}",
    response_model=DesignerSessionPublic,
    summary="Edit element properties",
    description="Merge attribute changes into the element; the result must satisfy "
    "the element type's attribute schema",
)
async def update_element(
    session_id: str,
    element_id: str,
    request: ElementUpdateRequest,
    sessions: SessionManagerDep,
    user: CurrentUserOptional,
) -> DesignerSessionPublic:
    try:
        sessions.update_element(user, session_id, element_id, request.extra_attributes)
        return sessions.get(user, session_id).to_public()
    except FormBuilderError as e:
        raise _http_error(e)


@router.delete(
    "/api/designer/{session_id}/elements/{element_id}",
    response_model=DesignerSessionPublic,
    summary="Remove an element",
    description="Remove an element from the layout; unknown ids are ignored",
)
async def remove_element(
    session_id: str,
    element_id: str,
    sessions: SessionManagerDep,
    user: CurrentUserOptional,
) -> DesignerSessionPublic:
    try:
        sessions.remove_element(user, session_id, element_id)
        return sessions.get(user, session_id).to_public()
    except FormBuilderError as e:
        raise _http_error(e)


@router.put(
    "/api/designer/{session_id}/selection",
    response_model=DesignerSessionPublic,
    summary="Select an element",
    description="Select an element for property editing, or clear the selection with null",
)
async def select_element(
    session_id: str,
    request: SelectionRequest,
    sessions: SessionManagerDep,
    user: CurrentUserOptional,
) -> DesignerSessionPublic:
    try:
        sessions.select(user, session_id, request.element_id)
        return sessions.get(user, session_id).to_public()
    except FormBuilderError as e:
        raise _http_error(e)


@router.post(
    "/api/designer/{session_id}/preview/validate",
    response_model=PreviewValidateResponse,
    summary="Validate preview values",
    description="Run the same checks a submission would against the current layout",
)
async def preview_validate(
    session_id: str,
    request: PreviewValidateRequest,
    sessions: SessionManagerDep,
    user: CurrentUserOptional,
) -> PreviewValidateResponse:
    try:
        invalid = sessions.preview_validate(user, session_id, request.values)
    except FormBuilderError as e:
        raise _http_error(e)
    return PreviewValidateResponse(valid=not invalid, invalid_fields=invalid)


@router.post(
    "/api/designer/{session_id}/save",
    response_model=FormPublic,
    summary="Save the layout",
    description="Write the session's layout to its form",
)
async def save_designer(
    session_id: str,
    forms: FormServiceDep,
    sessions: SessionManagerDep,
    user: CurrentUserOptional,
) -> FormPublic:
    try:
        form = await sessions.save(forms, user, session_id)
    except FormBuilderError as e:
        raise _http_error(e)
    return FormPublic.model_validate(form)


@router.delete(
    "/api/designer/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Close a designer session",
    description="Discard the session; unsaved changes are lost",
)
async def close_designer(
    session_id: str, sessions: SessionManagerDep, user: CurrentUserOptional
) -> None:
    try:
        sessions.close(user, session_id)
    except FormBuilderError as e:
        raise _http_error(e)
