"""
Element contract models.

An element instance is the unit stored in a form layout. Its wire shape is
``{"id": ..., "type": ..., "extraAttributes": {...}}``; the attribute bag is
normalized against the variant registered for ``type``.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from formbuilder.models.enums import ElementType


class ElementInstance(BaseModel):
    """A single typed element in a form layout."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(..., min_length=1)
    type: ElementType
    extra_attributes: dict[str, Any] = Field(default_factory=dict, alias="extraAttributes")

    @model_validator(mode="after")
    def normalize_attributes(self):
        """Restrict attributes to the variant's declared set, filling defaults."""
        from formbuilder.designer.registry import lookup

        variant = lookup(self.type)
        object.__setattr__(
            self, "extra_attributes", variant.normalize_attributes(self.extra_attributes)
        )
        return self

    def to_wire(self) -> dict[str, Any]:
        """Dump using the persisted layout key names."""
        return self.model_dump(mode="json", by_alias=True)


class PaletteEntry(BaseModel):
    """A palette button offered by the designer sidebar."""

    type: ElementType
    label: str
    is_input: bool
    default_attributes: dict[str, Any]
