"""
Submit Router

Public submission page endpoints, addressed by a form's share url.
No authentication: anyone holding the link can view and submit.
"""

import logging

from fastapi import APIRouter, HTTPException, status

from formbuilder.core.exceptions import MalformedLayout, NotFound, ValidationFailed
from formbuilder.models.contracts.forms import (
    FormSubmitRequest,
    FormSubmitResponse,
    PublicFormResponse,
)
from formbuilder.services.forms import FormServiceDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/submit", tags=["Submit"])


@router.get(
    "/{share_url}",
    response_model=PublicFormResponse,
    summary="Get a published form",
    description="Layout of a published form for rendering; counts one visit",
)
async def get_public_form(share_url: str, forms: FormServiceDep) -> PublicFormResponse:
    try:
        form, elements = await forms.get_form_by_url(share_url)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except MalformedLayout as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)
    return PublicFormResponse(share_url=form.share_url, elements=elements)


@router.post(
    "/{share_url}",
    response_model=FormSubmitResponse,
    summary="Submit a published form",
    description="Validate values against every element and store them",
)
async def submit_form(
    share_url: str, request: FormSubmitRequest, forms: FormServiceDep
) -> FormSubmitResponse:
    try:
        await forms.submit_form(share_url, request.values)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except ValidationFailed as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": e.message, "invalid_fields": e.invalid_fields},
        )
    except MalformedLayout as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)
    return FormSubmitResponse()
