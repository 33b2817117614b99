"""Unit tests for validate_values()."""

from formbuilder.designer import validate_value, validate_values
from formbuilder.models.enums import ElementType
from tests.helpers.factories import make_element


def _layout():
    return [
        make_element("title", ElementType.TITLE_FIELD),
        make_element("name", ElementType.TEXT_FIELD, required=True),
        make_element("age", ElementType.NUMBER_FIELD),
        make_element("terms", ElementType.CHECKBOX_FIELD, required=True),
    ]


class TestValidateValues:
    def test_all_valid(self):
        values = {"name": "Ada", "terms": "true"}
        assert validate_values(_layout(), values) == []

    def test_missing_values_count_as_empty(self):
        assert validate_values(_layout(), {}) == ["name", "terms"]

    def test_invalid_ids_in_layout_order(self):
        values = {"terms": "false", "name": ""}
        assert validate_values(_layout(), values) == ["name", "terms"]

    def test_values_for_unknown_ids_are_ignored(self):
        values = {"name": "Ada", "terms": "true", "ghost": ""}
        assert validate_values(_layout(), values) == []

    def test_empty_layout_accepts_anything(self):
        assert validate_values([], {"a": "b"}) == []


class TestValidateValue:
    def test_dispatches_on_type(self):
        required_text = make_element("x", ElementType.TEXT_FIELD, required=True)
        required_box = make_element("c", ElementType.CHECKBOX_FIELD, required=True)

        assert validate_value(required_text, "false") is True
        assert validate_value(required_box, "false") is False
