"""
Forms Router

CRUD operations for the current user's forms, plus their statistics and
submissions.
"""

import logging

from fastapi import APIRouter, HTTPException, status

from formbuilder.core.auth import CurrentUserOptional
from formbuilder.core.exceptions import MalformedLayout, NotFound, Unauthenticated, ValidationFailed
from formbuilder.models.contracts.forms import (
    FormCreate,
    FormPublic,
    FormStats,
    SubmissionsTable,
    UpdateFormContentRequest,
)
from formbuilder.services.forms import FormServiceDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/forms", tags=["Forms"])


def _unauthenticated(e: Unauthenticated) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=e.message,
        headers={"WWW-Authenticate": "Bearer"},
    )


@router.get(
    "",
    response_model=list[FormPublic],
    summary="List forms",
    description="List the current user's forms, newest first",
)
async def list_forms(forms: FormServiceDep, user: CurrentUserOptional) -> list[FormPublic]:
    try:
        return [FormPublic.model_validate(f) for f in await forms.list_forms(user)]
    except Unauthenticated as e:
        raise _unauthenticated(e)


@router.post(
    "",
    response_model=FormPublic,
    status_code=status.HTTP_201_CREATED,
    summary="Create a form",
    description="Create an empty, unpublished form",
)
async def create_form(
    request: FormCreate, forms: FormServiceDep, user: CurrentUserOptional
) -> FormPublic:
    try:
        form = await forms.create_form(user, request)
    except Unauthenticated as e:
        raise _unauthenticated(e)
    except ValidationFailed as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": e.message, "invalid_fields": e.invalid_fields},
        )
    return FormPublic.model_validate(form)


@router.get(
    "/stats",
    response_model=FormStats,
    summary="Get overall statistics",
    description="Visits, submissions and derived rates across all the user's forms",
)
async def get_overall_stats(forms: FormServiceDep, user: CurrentUserOptional) -> FormStats:
    try:
        return await forms.get_form_stats(user)
    except Unauthenticated as e:
        raise _unauthenticated(e)


@router.get(
    "/{form_id}",
    response_model=FormPublic,
    summary="Get form by ID",
)
async def get_form(form_id: int, forms: FormServiceDep, user: CurrentUserOptional) -> FormPublic:
    try:
        return FormPublic.model_validate(await forms.get_form(user, form_id))
    except Unauthenticated as e:
        raise _unauthenticated(e)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.put(
    "/{form_id}/content",
    response_model=FormPublic,
    summary="Save form layout",
    description="Replace the stored layout of an unpublished form",
)
async def update_form_content(
    form_id: int,
    request: UpdateFormContentRequest,
    forms: FormServiceDep,
    user: CurrentUserOptional,
) -> FormPublic:
    try:
        form = await forms.update_form_content(user, form_id, request.content)
    except Unauthenticated as e:
        raise _unauthenticated(e)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except (ValidationFailed, MalformedLayout) as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message)
    return FormPublic.model_validate(form)


@router.post(
    "/{form_id}/publish",
    response_model=FormPublic,
    summary="Publish a form",
    description="Make the form reachable at its share url. Published forms can no longer be edited.",
)
async def publish_form(form_id: int, forms: FormServiceDep, user: CurrentUserOptional) -> FormPublic:
    try:
        form = await forms.publish_form(user, form_id)
    except Unauthenticated as e:
        raise _unauthenticated(e)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return FormPublic.model_validate(form)


@router.get(
    "/{form_id}/stats",
    response_model=FormStats,
    summary="Get form statistics",
)
async def get_form_stats(form_id: int, forms: FormServiceDep, user: CurrentUserOptional) -> FormStats:
    try:
        return await forms.get_form_stats(user, form_id)
    except Unauthenticated as e:
        raise _unauthenticated(e)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.get(
    "/{form_id}/submissions",
    response_model=SubmissionsTable,
    summary="Get form submissions",
    description="Submissions as a table whose columns are the form's input elements",
)
async def get_form_submissions(
    form_id: int, forms: FormServiceDep, user: CurrentUserOptional
) -> SubmissionsTable:
    try:
        return await forms.get_submissions_table(user, form_id)
    except Unauthenticated as e:
        raise _unauthenticated(e)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except MalformedLayout as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)
