"""
Element variants.

Each element type is described by one immutable ElementVariant: the palette
label, the attribute schema used for construction and property editing, and
the submission validation predicate. Variants never inspect the runtime type
of an instance; callers reach them through the registry by type tag.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from formbuilder.core.exceptions import ValidationFailed
from formbuilder.models.contracts.elements import ElementInstance
from formbuilder.models.enums import ElementType

logger = logging.getLogger(__name__)


# ==================== ATTRIBUTE SCHEMAS ====================


class ElementAttributes(BaseModel):
    """Base attribute schema; unknown attributes are rejected."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class TitleAttributes(ElementAttributes):
    title: str = Field(default="Title Field", min_length=2, max_length=50)


class SubTitleAttributes(ElementAttributes):
    title: str = Field(default="Subtitle Field", min_length=2, max_length=50)


class ParagraphAttributes(ElementAttributes):
    text: str = Field(default="Text Here", min_length=2, max_length=500)


class SpacerAttributes(ElementAttributes):
    height: int = Field(default=20, ge=5, le=50, description="Height in px")


class CheckboxAttributes(ElementAttributes):
    label: str = Field(default="Checkbox Field", min_length=2, max_length=50)
    helper_text: str = Field(default="Helper Text", max_length=200, alias="helperText")
    required: bool = False


class DateAttributes(ElementAttributes):
    label: str = Field(default="Date Field", min_length=2, max_length=50)
    helper_text: str = Field(default="Pick a Date", max_length=200, alias="helperText")
    required: bool = False


class TextAttributes(ElementAttributes):
    label: str = Field(default="Text Field", min_length=2, max_length=50)
    helper_text: str = Field(default="Helper Text", max_length=200, alias="helperText")
    required: bool = False
    placeholder: str = Field(default="Value Here...", max_length=50)


class NumberAttributes(TextAttributes):
    label: str = Field(default="Number Field", min_length=2, max_length=50)
    placeholder: str = Field(default="0", max_length=50)


class TextAreaAttributes(TextAttributes):
    label: str = Field(default="TextArea Field", min_length=2, max_length=50)
    rows: int = Field(default=3, ge=1, le=10)


class SelectAttributes(TextAttributes):
    label: str = Field(default="Select Field", min_length=2, max_length=50)
    options: list[str] = Field(default_factory=list)


# ==================== VALIDATION PREDICATES ====================


def _always_valid(instance: ElementInstance, value: str) -> bool:
    return True


def _non_empty_when_required(instance: ElementInstance, value: str) -> bool:
    if instance.extra_attributes.get("required"):
        return len(value) > 0
    return True


def _checked_when_required(instance: ElementInstance, value: str) -> bool:
    # Checkboxes submit "true"/"false"; "false" is not an answer to a required box
    if instance.extra_attributes.get("required"):
        return value == "true"
    return True


# ==================== VARIANT DESCRIPTOR ====================


@dataclass(frozen=True)
class ElementVariant:
    """
    Behavior table for one element type.

    Attributes:
        type: Type tag this variant handles
        label: Palette button label
        attributes_model: Schema for the instance attribute bag
        validator: Predicate deciding whether a raw submitted value is acceptable
        is_input: Whether the element collects a value on submission
    """

    type: ElementType
    label: str
    attributes_model: type[ElementAttributes]
    validator: Callable[[ElementInstance, str], bool]
    is_input: bool = False

    def default_attributes(self) -> dict[str, Any]:
        return self.attributes_model().model_dump(by_alias=True)

    def construct(self, element_id: str) -> ElementInstance:
        """Build a fresh instance carrying the default attribute bag."""
        return ElementInstance(
            id=element_id,
            type=self.type,
            extra_attributes=self.default_attributes(),
        )

    def validate(self, instance: ElementInstance, value: str) -> bool:
        """
        Decide whether ``value`` is acceptable for ``instance`` on submission.

        The same predicate backs live preview feedback and the submission gate.
        """
        return self.validator(instance, value)

    def normalize_attributes(self, attributes: dict[str, Any] | None) -> dict[str, Any]:
        """
        Validate an attribute bag and return it in canonical wire form.

        Raises:
            ValueError: If the bag holds unknown attributes or invalid values
        """
        try:
            parsed = self.attributes_model.model_validate(attributes or {})
        except ValidationError as e:
            raise ValueError(f"invalid attributes for {self.type.value}: {e}") from e
        return parsed.model_dump(by_alias=True)

    def update_attributes(
        self, instance: ElementInstance, changes: dict[str, Any]
    ) -> ElementInstance:
        """
        Apply a property edit and return the replacement instance.

        Args:
            instance: Current instance (must be of this variant's type)
            changes: Attributes to overwrite, by wire or python name

        Returns:
            New ElementInstance with the same id and merged attributes

        Raises:
            ValidationFailed: If the merged attributes violate the schema
        """
        wire_names = {
            name: info.alias or name
            for name, info in self.attributes_model.model_fields.items()
        }
        merged = dict(instance.extra_attributes)
        for key, value in changes.items():
            merged[wire_names.get(key, key)] = value
        try:
            parsed = self.attributes_model.model_validate(merged)
        except ValidationError as e:
            fields = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
            logger.debug(f"Rejected property edit for {instance.id}: {fields}")
            raise ValidationFailed(
                f"Invalid properties for {self.type.value}", invalid_fields=fields
            ) from e
        return ElementInstance(
            id=instance.id,
            type=self.type,
            extra_attributes=parsed.model_dump(by_alias=True),
        )


# ==================== VARIANTS ====================


TEXT_FIELD = ElementVariant(
    type=ElementType.TEXT_FIELD,
    label="Text Field",
    attributes_model=TextAttributes,
    validator=_non_empty_when_required,
    is_input=True,
)

TITLE_FIELD = ElementVariant(
    type=ElementType.TITLE_FIELD,
    label="Title Field",
    attributes_model=TitleAttributes,
    validator=_always_valid,
)

SUBTITLE_FIELD = ElementVariant(
    type=ElementType.SUBTITLE_FIELD,
    label="SubTitle Field",
    attributes_model=SubTitleAttributes,
    validator=_always_valid,
)

PARAGRAPH_FIELD = ElementVariant(
    type=ElementType.PARAGRAPH_FIELD,
    label="Paragraph Field",
    attributes_model=ParagraphAttributes,
    validator=_always_valid,
)

SPACER_FIELD = ElementVariant(
    type=ElementType.SPACER_FIELD,
    label="Spacer Field",
    attributes_model=SpacerAttributes,
    validator=_always_valid,
)

NUMBER_FIELD = ElementVariant(
    type=ElementType.NUMBER_FIELD,
    label="Number Field",
    attributes_model=NumberAttributes,
    validator=_non_empty_when_required,
    is_input=True,
)

TEXTAREA_FIELD = ElementVariant(
    type=ElementType.TEXTAREA_FIELD,
    label="TextArea Field",
    attributes_model=TextAreaAttributes,
    validator=_non_empty_when_required,
    is_input=True,
)

DATE_FIELD = ElementVariant(
    type=ElementType.DATE_FIELD,
    label="Date Field",
    attributes_model=DateAttributes,
    validator=_non_empty_when_required,
    is_input=True,
)

SELECT_FIELD = ElementVariant(
    type=ElementType.SELECT_FIELD,
    label="Select Field",
    attributes_model=SelectAttributes,
    validator=_non_empty_when_required,
    is_input=True,
)

CHECKBOX_FIELD = ElementVariant(
    type=ElementType.CHECKBOX_FIELD,
    label="Checkbox Field",
    attributes_model=CheckboxAttributes,
    validator=_checked_when_required,
    is_input=True,
)
