"""
Submission value validation.

Both the designer preview and the public submission endpoint go through
validate_values(), so a value accepted while editing is never rejected on
submit (and vice versa) for the same element attributes.
"""

from typing import Mapping, Sequence

from formbuilder.designer.registry import lookup
from formbuilder.models.contracts.elements import ElementInstance


def validate_value(instance: ElementInstance, value: str) -> bool:
    """Run the instance's variant predicate against a raw value."""
    return lookup(instance.type).validate(instance, value)


def validate_values(
    layout: Sequence[ElementInstance], values: Mapping[str, str]
) -> list[str]:
    """
    Validate a submission against a layout.

    Missing values are checked as the empty string.

    Args:
        layout: Elements of the form, in order
        values: Element id -> raw string value

    Returns:
        Ids of rejected elements, in layout order (empty when all pass)
    """
    return [
        element.id
        for element in layout
        if not validate_value(element, values.get(element.id, ""))
    ]
