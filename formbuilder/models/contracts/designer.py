"""
Designer session contract models.

Drag payloads keep the camelCase keys the drag layer attaches to nodes
(``isDesignerBtnElement``, ``elementId`` ...) so the client can forward them
untouched.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from formbuilder.models.contracts.elements import ElementInstance
from formbuilder.models.enums import ElementType


# ==================== DRAG PAYLOADS ====================


class DragSourceData(BaseModel):
    """Data attached to the dragged node."""
    model_config = ConfigDict(populate_by_name=True)

    is_designer_btn_element: bool = Field(default=False, alias="isDesignerBtnElement")
    is_designer_element: bool = Field(default=False, alias="isDesignerElement")
    type: ElementType | None = None
    element_id: str | None = Field(default=None, alias="elementId")


class DropTargetData(BaseModel):
    """Data attached to the droppable the drag was released over."""
    model_config = ConfigDict(populate_by_name=True)

    is_designer_drop_area: bool = Field(default=False, alias="isDesignerDropArea")
    is_top_half_designer_element: bool = Field(default=False, alias="isTopHalfDesignerElement")
    is_bottom_half_designer_element: bool = Field(
        default=False, alias="isBottomHalfDesignerElement")
    type: ElementType | None = None
    element_id: str | None = Field(default=None, alias="elementId")


class DragEndRequest(BaseModel):
    """A drag-end event; either side may be missing for a cancelled drop."""
    active: DragSourceData | None = None
    over: DropTargetData | None = None


# ==================== SESSION MODELS ====================


class DesignerSessionPublic(BaseModel):
    """Designer session state returned after every call."""
    session_id: str
    form_id: int
    elements: list[ElementInstance]
    selected_element_id: str | None = None
    # Mirrors the client's per-change "unsaved" marker
    dirty: bool = False


class DropResponse(BaseModel):
    """Result of a drop plus the resulting session state."""
    element: ElementInstance | None = Field(
        default=None, description="Element inserted or moved (null when nothing changed)")
    session: DesignerSessionPublic


class ElementUpdateRequest(BaseModel):
    """Property edit for one element."""
    extra_attributes: dict[str, Any] = Field(..., alias="extraAttributes")

    model_config = ConfigDict(populate_by_name=True)


class SelectionRequest(BaseModel):
    element_id: str | None = None


class PreviewValidateRequest(BaseModel):
    """Values typed into the live preview, keyed by element id."""
    values: dict[str, str] = Field(default_factory=dict)


class PreviewValidateResponse(BaseModel):
    valid: bool
    invalid_fields: list[str] = Field(default_factory=list)
