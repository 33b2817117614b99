"""
Element Type Registry

Fixed mapping from element type tag to its variant. Populated once at import
and never modified; all polymorphic behavior is dispatched through lookup().
"""

from types import MappingProxyType
from typing import Mapping

from formbuilder.core.exceptions import UnknownVariant
from formbuilder.designer import variants
from formbuilder.designer.variants import ElementVariant
from formbuilder.models.contracts.elements import PaletteEntry
from formbuilder.models.enums import ElementType

# Palette order: layout elements first, then inputs
_PALETTE_ORDER: tuple[ElementVariant, ...] = (
    variants.TITLE_FIELD,
    variants.SUBTITLE_FIELD,
    variants.PARAGRAPH_FIELD,
    variants.SPACER_FIELD,
    variants.TEXT_FIELD,
    variants.NUMBER_FIELD,
    variants.TEXTAREA_FIELD,
    variants.DATE_FIELD,
    variants.SELECT_FIELD,
    variants.CHECKBOX_FIELD,
)

ELEMENT_VARIANTS: Mapping[ElementType, ElementVariant] = MappingProxyType(
    {variant.type: variant for variant in _PALETTE_ORDER}
)


def lookup(tag: ElementType | str) -> ElementVariant:
    """
    Get the variant registered for a type tag.

    Args:
        tag: ElementType member or its string value (e.g. "TextField")

    Returns:
        The registered ElementVariant

    Raises:
        UnknownVariant: If the tag is outside the registered set
    """
    try:
        return ELEMENT_VARIANTS[ElementType(tag)]
    except (ValueError, KeyError):
        raise UnknownVariant(f"Unknown element type: {tag}") from None


def palette() -> list[PaletteEntry]:
    """List palette buttons in display order."""
    return [
        PaletteEntry(
            type=variant.type,
            label=variant.label,
            is_input=variant.is_input,
            default_attributes=variant.default_attributes(),
        )
        for variant in _PALETTE_ORDER
    ]
