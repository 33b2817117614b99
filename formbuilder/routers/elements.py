"""
Elements Router

Palette of element types offered by the designer sidebar.
"""

from fastapi import APIRouter

from formbuilder.designer import palette
from formbuilder.models.contracts.elements import PaletteEntry

router = APIRouter(prefix="/api/elements", tags=["Elements"])


@router.get(
    "",
    response_model=list[PaletteEntry],
    summary="List element types",
    description="Palette buttons in display order, with each type's default attributes",
)
async def list_element_types() -> list[PaletteEntry]:
    return palette()
