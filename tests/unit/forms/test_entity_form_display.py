import pytest

from bulk_edit.constants import CARDINALITY_UNLIMITED
from bulk_edit.core.form_state import FormState
from bulk_edit.core.form_tree import FormNode, find_form_element
from bulk_edit.forms.display import EntityFormDisplay
from bulk_edit.models.field_config import FieldConfig
from tests.fixtures.bulk_edit_fakes import FakeRecord


def _field(name: str, label: str, *, widget: str = "string", cardinality: int = 1, weight: int = 0) -> FieldConfig:
    return FieldConfig(
        content_type_id="node",
        bundle="page",
        field_name=name,
        label=label,
        widget=widget,
        cardinality=cardinality,
        weight=weight,
        required=True,
        display_configurable=True,
        form_surfaces=["default", "bulk_edit"],
    )


@pytest.mark.unit
def test_build_form_renders_slot_per_cardinality() -> None:
    display = EntityFormDisplay([_field("tags", "Tags", cardinality=3, weight=4)], "bulk_edit")
    form = FormNode(parents=["node", "page"])

    display.build_form(FakeRecord(id=None, entity_type_id="node", bundle="page"), form, FormState())

    wrapper = form["tags"]
    assert wrapper.kind == "container"
    assert wrapper.weight == 4
    assert wrapper["widget"].title == "Tags"
    assert list(wrapper["widget"].children) == ["0", "1", "2"]
    assert wrapper["widget"]["0"]["value"].title is None
    assert wrapper["widget"]["0"]["value"].required is True
    assert wrapper["widget"]["1"]["value"].required is False


@pytest.mark.unit
def test_build_form_value_control_inherits_widget_label() -> None:
    display = EntityFormDisplay([_field("title", "Title")], "bulk_edit")
    form = FormNode()
    display.build_form(FakeRecord(id=None, entity_type_id="node", bundle="page"), form, FormState())

    element = find_form_element(form["title"])

    assert element is form["title"]["widget"]["0"]["value"]
    assert element.kind == "textfield"
    assert element.title == "Title"


@pytest.mark.unit
def test_build_form_unlimited_field_adds_one_empty_slot() -> None:
    display = EntityFormDisplay([_field("links", "Links", cardinality=CARDINALITY_UNLIMITED)], "bulk_edit")
    record = FakeRecord(id=1, entity_type_id="node", bundle="page", values={"links": [{"value": "a"}]})
    form = FormNode()

    display.build_form(record, form, FormState())

    assert list(form["links"]["widget"].children) == ["0", "1"]
    assert form["links"]["widget"]["0"]["value"].default_value == "a"


@pytest.mark.unit
def test_build_form_boolean_renders_single_checkbox() -> None:
    display = EntityFormDisplay([_field("promote", "Promoted", widget="boolean")], "bulk_edit")
    form = FormNode()

    display.build_form(FakeRecord(id=None, entity_type_id="node", bundle="page"), form, FormState())

    assert form["promote"]["widget"].kind == "checkbox"
    assert form["promote"]["widget"].title == "Promoted"


@pytest.mark.unit
def test_extract_form_values_reads_under_form_parents() -> None:
    display = EntityFormDisplay(
        [
            _field("title", "Title"),
            _field("tags", "Tags", cardinality=2),
            _field("count", "Count", widget="integer"),
            _field("promote", "Promoted", widget="boolean"),
            _field("body", "Body", widget="text_long"),
        ],
        "bulk_edit",
    )
    record = FakeRecord(id=None, entity_type_id="node", bundle="page", values={"body": [{"value": "keep"}]})
    form_state = FormState(
        values={
            "node": {
                "page": {
                    "title": {"0": {"value": "New"}},
                    "tags": [{"value": "a"}, {"value": ""}, {"value": "c"}],
                    "count": {"0": {"value": "12"}},
                    "promote": {"value": "1"},
                },
            },
        },
    )

    display.extract_form_values(record, FormNode(parents=["node", "page"]), form_state)

    assert record.values["title"] == [{"value": "New"}]
    assert record.values["tags"] == [{"value": "a"}, {"value": "c"}]
    assert record.values["count"] == [{"value": 12}]
    assert record.values["promote"] == [{"value": True}]
    assert record.values["body"] == [{"value": "keep"}]


@pytest.mark.unit
def test_extract_form_values_accepts_single_item_mapping() -> None:
    display = EntityFormDisplay([_field("title", "Title"), _field("tags", "Tags", cardinality=3)], "bulk_edit")
    record = FakeRecord(
        id=None,
        entity_type_id="node",
        bundle="page",
        values={"title": [{"value": "Old"}], "tags": [{"value": "a"}]},
    )
    form_state = FormState(
        values={"node": {"page": {"title": {"value": "New"}, "tags": {"value": "b"}}}},
    )

    display.extract_form_values(record, FormNode(parents=["node", "page"]), form_state)

    assert record.values["title"] == [{"value": "New"}]
    assert record.values["tags"] == [{"value": "b"}]
