"""
Pydantic contracts (API request/response models).
"""

from formbuilder.models.contracts.base import generate_element_id
from formbuilder.models.contracts.designer import (
    DesignerSessionPublic,
    DragEndRequest,
    DragSourceData,
    DropResponse,
    DropTargetData,
    ElementUpdateRequest,
    PreviewValidateRequest,
    PreviewValidateResponse,
    SelectionRequest,
)
from formbuilder.models.contracts.elements import ElementInstance, PaletteEntry
from formbuilder.models.contracts.forms import (
    FormCreate,
    FormPublic,
    FormStats,
    FormSubmitRequest,
    FormSubmitResponse,
    PublicFormResponse,
    SubmissionColumn,
    SubmissionRow,
    SubmissionsTable,
    UpdateFormContentRequest,
)

__all__ = [
    "DesignerSessionPublic",
    "DragEndRequest",
    "DragSourceData",
    "DropResponse",
    "DropTargetData",
    "ElementInstance",
    "ElementUpdateRequest",
    "FormCreate",
    "FormPublic",
    "FormStats",
    "FormSubmitRequest",
    "FormSubmitResponse",
    "PaletteEntry",
    "PreviewValidateRequest",
    "PreviewValidateResponse",
    "PublicFormResponse",
    "SelectionRequest",
    "SubmissionColumn",
    "SubmissionRow",
    "SubmissionsTable",
    "UpdateFormContentRequest",
    "generate_element_id",
]
