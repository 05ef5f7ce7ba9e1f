import pytest

from bulk_edit.constants import BulkEditMessages, FormKind
from bulk_edit.core.form_tree import FormNode
from bulk_edit.core.selector import build_selector_form
from tests.fixtures.bulk_edit_fakes import FakeField


def _bundle_form(*fields: tuple[str, str, int]) -> FormNode:
    form = FormNode(kind=FormKind.DETAILS, parents=["node", "page"])
    for key, label, weight in fields:
        wrapper = form.add(key, FormNode(kind=FormKind.CONTAINER, weight=weight))
        widget = wrapper.add("widget", FormNode(title=label))
        widget.add("0", FormNode()).add("value", FormNode(kind=FormKind.TEXTFIELD, required=True))
    return form


@pytest.mark.unit
def test_build_selector_form_adds_entry_per_configurable_field() -> None:
    form = _bundle_form(("title", "Title", 0), ("body", "Body", 5))
    definitions = {"title": FakeField("title"), "body": FakeField("body")}

    selector = build_selector_form("node", "page", form, definitions)

    assert selector.kind == "fieldset"
    assert selector.title == BulkEditMessages.SELECTOR_TITLE
    assert selector.tree is True
    assert list(selector.children) == ["title", "body"]
    assert selector["title"].kind == "checkbox"
    assert selector["title"].title == "Title"
    assert selector["body"].weight == 5


@pytest.mark.unit
def test_build_selector_form_relaxes_control_and_binds_visibility() -> None:
    form = _bundle_form(("title", "Title", 0))

    build_selector_form("node", "page", form, {"title": FakeField("title")})

    control = form["title"]["widget"]["0"]["value"]
    assert control.required is False
    assert control.tree is True
    assert form["title"].states == {
        "visible": {'[name="node[page][_field_selector][title]"]': {"checked": True}},
    }


@pytest.mark.unit
def test_build_selector_form_hides_non_configurable_fields() -> None:
    form = _bundle_form(("title", "Title", 0), ("revision_log", "Revision log message", 10))
    definitions = {"title": FakeField("title"), "revision_log": FakeField("revision_log", configurable=False)}

    selector = build_selector_form("node", "page", form, definitions)

    assert "revision_log" not in selector
    assert form["revision_log"]["widget"]["0"]["value"].access is False
    assert form["revision_log"].states == {}


@pytest.mark.unit
def test_build_selector_form_hides_fields_without_definition() -> None:
    form = _bundle_form(("legacy", "Legacy", 0))

    selector = build_selector_form("node", "page", form, {})

    assert "legacy" not in selector
    assert form["legacy"]["widget"]["0"]["value"].access is False


@pytest.mark.unit
def test_build_selector_form_skips_hidden_and_layout_only_children() -> None:
    form = _bundle_form(("title", "Title", 0))
    form.add("hidden", FormNode(kind=FormKind.TEXTFIELD, title="Hidden", access=False))
    form.add("actions", FormNode(kind=FormKind.CONTAINER)).add("note", FormNode(kind=FormKind.MARKUP))
    definitions = {"title": FakeField("title"), "hidden": FakeField("hidden"), "actions": FakeField("actions")}

    selector = build_selector_form("node", "page", form, definitions)

    assert list(selector.children) == ["title"]


@pytest.mark.unit
def test_build_selector_form_without_entries_uses_empty_title() -> None:
    form = _bundle_form(("revision_log", "Revision log message", 0))

    definitions = {"revision_log": FakeField("revision_log", configurable=False)}

    selector = build_selector_form("node", "page", form, definitions)

    assert selector.children == {}
    assert selector.title == BulkEditMessages.SELECTOR_EMPTY_TITLE
