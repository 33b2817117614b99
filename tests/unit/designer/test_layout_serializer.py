"""Unit tests for layout serialize()/deserialize()."""

import json

import pytest

from formbuilder.core.exceptions import MalformedLayout
from formbuilder.designer import EMPTY_LAYOUT, DesignerStore, deserialize, lookup, serialize
from formbuilder.models.enums import ElementType
from tests.helpers.factories import make_element


class TestSerialize:
    """Tests for serialize()"""

    def test_empty_layout(self):
        assert serialize([]) == EMPTY_LAYOUT == "[]"

    def test_wire_keys(self):
        text = serialize([make_element("x1", ElementType.TEXT_FIELD, helperText="Hint")])
        data = json.loads(text)

        assert data == [
            {
                "id": "x1",
                "type": "TextField",
                "extraAttributes": {
                    "label": "Text Field",
                    "helperText": "Hint",
                    "required": False,
                    "placeholder": "Value Here...",
                },
            }
        ]

    def test_preserves_order(self):
        layout = [make_element(i) for i in ("c", "a", "b")]
        assert [e["id"] for e in json.loads(serialize(layout))] == ["c", "a", "b"]

    def test_deterministic(self):
        layout = [make_element("a"), make_element("b", ElementType.SELECT_FIELD, options=["x"])]
        assert serialize(layout) == serialize(list(layout))


class TestDeserialize:
    """Tests for deserialize()"""

    def test_empty_layout(self):
        assert deserialize("[]") == []

    def test_accepts_bytes(self):
        assert deserialize(b"[]") == []

    def test_stored_layout(self, sample_layout_wire):
        layout = deserialize(json.dumps(sample_layout_wire))

        assert [(e.id, e.type) for e in layout] == [
            ("t1", ElementType.TITLE_FIELD),
            ("n1", ElementType.TEXT_FIELD),
        ]
        assert layout[1].extra_attributes["required"] is True
        assert json.loads(serialize(layout)) == sample_layout_wire

    def test_fills_missing_attributes(self):
        layout = deserialize('[{"id": "p1", "type": "ParagraphField", "extraAttributes": {}}]')
        assert layout[0].extra_attributes == {"text": "Text Here"}

    @pytest.mark.parametrize(
        "text",
        [
            "not json",
            "{}",
            '{"id": "a", "type": "TextField", "extraAttributes": {}}',
            '[{"type": "TextField", "extraAttributes": {}}]',
            '[{"id": "a", "type": "RatingField", "extraAttributes": {}}]',
            '[{"id": "a", "type": "TitleField", "extraAttributes": {"color": "red"}}]',
            '[{"id": "", "type": "TitleField", "extraAttributes": {}}]',
            '[{"id": "s", "type": "SpacerField", "extraAttributes": {"height": 1000}}]',
            '[{"id": "a", "type": "TextField", "extraAttributes": {}}, '
            '{"id": "a", "type": "DateField", "extraAttributes": {}}]',
        ],
    )
    def test_rejects_malformed_content(self, text):
        with pytest.raises(MalformedLayout):
            deserialize(text)

    def test_repeated_id_is_named(self):
        text = json.dumps(
            [
                {"id": "a", "type": "TextField", "extraAttributes": {}},
                {"id": "b", "type": "TitleField", "extraAttributes": {}},
                {"id": "a", "type": "DateField", "extraAttributes": {}},
            ]
        )

        with pytest.raises(MalformedLayout, match="'a'"):
            deserialize(text)


class TestRoundTrip:
    def test_designer_layout_survives_save_and_load(self):
        store = DesignerStore()
        store.insert(0, lookup(ElementType.TITLE_FIELD).construct("t1"))
        text_field = lookup(ElementType.TEXT_FIELD).construct("x1")
        store.insert(1, lookup(ElementType.TEXT_FIELD).update_attributes(text_field, {"required": True}))

        text = serialize(store.elements)
        data = json.loads(text)

        assert [(e["id"], e["type"]) for e in data] == [("t1", "TitleField"), ("x1", "TextField")]
        assert data[1]["extraAttributes"]["required"] is True
        assert deserialize(text) == list(store.elements)
