"""
Factory functions for test data.

Plain functions that support overrides, so tests state the data they care
about and take defaults for the rest.

Usage:
    from tests.helpers.factories import make_form, make_element

    def test_something():
        form = make_form(published=True)
"""

import json
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any

from formbuilder.designer import lookup, serialize
from formbuilder.models.contracts.elements import ElementInstance
from formbuilder.models.enums import ElementType

DEFAULT_CREATED_AT = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)


def make_element(
    element_id: str, element_type: ElementType = ElementType.TEXT_FIELD, **attributes: Any
) -> ElementInstance:
    """
    Build an element with default attributes, overriding by wire name.

    Example:
        make_element("a", ElementType.TEXT_FIELD, required=True, helperText="")
    """
    variant = lookup(element_type)
    merged = {**variant.default_attributes(), **attributes}
    return ElementInstance(id=element_id, type=element_type, extra_attributes=merged)


def make_form(**overrides: Any) -> SimpleNamespace:
    """
    Build a stand-in for a Form ORM row.

    ``elements`` may be passed instead of ``content`` to serialize a layout.
    """
    elements = overrides.pop("elements", None)
    data: dict[str, Any] = {
        "id": 1,
        "user_id": "user_00000000000000000001",
        "name": "Contact Form",
        "description": "Reach out to us",
        "published": False,
        "content": "[]",
        "visits": 0,
        "submissions": 0,
        "share_url": "5b3f6c3e-8f5c-4c4e-9d6a-2a7b0c1d2e3f",
        "created_at": DEFAULT_CREATED_AT,
        "form_submissions": [],
    }
    if elements is not None:
        data["content"] = serialize(elements)
    data.update(overrides)
    return SimpleNamespace(**data)


def make_submission(values: dict[str, str], **overrides: Any) -> SimpleNamespace:
    """Build a stand-in for a FormSubmission ORM row."""
    data: dict[str, Any] = {
        "id": 1,
        "form_id": 1,
        "content": json.dumps(values),
        "created_at": DEFAULT_CREATED_AT,
    }
    data.update(overrides)
    return SimpleNamespace(**data)


def make_form_create_data(**overrides: Any) -> dict[str, Any]:
    """Build a create-form request body."""
    data: dict[str, Any] = {
        "name": "Contact Form",
        "description": "Reach out to us",
    }
    data.update(overrides)
    return data
