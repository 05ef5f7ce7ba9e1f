"""记录表单展示.

每个字段渲染为如下结构::

    <field_name>            容器, 携带字段 weight
      widget                带标签的控件组
        0, 1, ...           每个条目一个槽位
          value             真实输入控件, 不带标签

布尔字段直接在 ``widget`` 下渲染单个勾选框. 提交值按
``form.parents + [field_name, delta, "value"]`` 读取.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date
from typing import TYPE_CHECKING, Any

from bulk_edit.constants import CARDINALITY_UNLIMITED, FormKind
from bulk_edit.core.form_tree import FormNode
from bulk_edit.utils.structlog_config import log_debug

if TYPE_CHECKING:
    from bulk_edit.core.form_state import FormState
    from bulk_edit.core.host import EditableRecord
    from bulk_edit.models.field_config import FieldConfig
    from bulk_edit.repositories.field_definitions_repository import FieldDefinitionsRepository
    from bulk_edit.types import FieldItem, FieldValue

WIDGET_KINDS: dict[str, FormKind] = {
    "string": FormKind.TEXTFIELD,
    "text_long": FormKind.TEXTAREA,
    "integer": FormKind.NUMBER,
    "boolean": FormKind.CHECKBOX,
    "list": FormKind.SELECT,
    "datetime": FormKind.DATE,
}


def _slot_count(field: FieldConfig, current: FieldValue) -> int:
    if field.cardinality == CARDINALITY_UNLIMITED:
        return len(current) + 1
    return max(field.cardinality, 1)


def _coerce(widget: str, raw: Any) -> Any:
    if widget == "integer":
        if isinstance(raw, bool):
            return int(raw)
        if isinstance(raw, str):
            return int(raw.strip()) if raw.strip().lstrip("-").isdigit() else None
        return raw
    if widget == "boolean":
        if isinstance(raw, str):
            return raw.strip().lower() in {"1", "true", "on", "yes"}
        return bool(raw)
    if widget == "datetime" and isinstance(raw, date):
        return raw.isoformat()
    return raw


def _iter_deltas(raw: Any) -> list[Any]:
    """把列表或以序号为键的字典展开为按序号排序的条目, 单个条目字典视为一项."""
    if isinstance(raw, Mapping):
        keys = sorted((key for key in raw if str(key).isdigit()), key=lambda key: int(key))
        if not keys and "value" in raw:
            return [raw]
        return [raw[key] for key in keys]
    if isinstance(raw, Sequence) and not isinstance(raw, str | bytes):
        return list(raw)
    return [raw]


class EntityFormDisplay:
    """某个 bundle 在某个展示面上的表单."""

    def __init__(self, fields: Sequence[FieldConfig], surface: str) -> None:
        self.fields = list(fields)
        self.surface = surface

    def build_form(self, record: EditableRecord, form: FormNode, form_state: FormState) -> None:
        for field in self.fields:
            form.add(field.field_name, self._build_field_widget(record, field))

    def _build_field_widget(self, record: EditableRecord, field: FieldConfig) -> FormNode:
        kind = WIDGET_KINDS.get(field.widget, FormKind.TEXTFIELD)
        current = record.get_field_value(field.field_name)
        wrapper = FormNode(kind=FormKind.CONTAINER, weight=field.weight)

        if kind is FormKind.CHECKBOX:
            wrapper.add(
                "widget",
                FormNode(
                    kind=kind,
                    title=field.label,
                    description=field.description,
                    default_value=bool(current and current[0].get("value")),
                ),
            )
            return wrapper

        widget = wrapper.add(
            "widget",
            FormNode(title=field.label, description=field.description, required=field.required),
        )
        attributes = {"options": list(field.options or [])} if kind is FormKind.SELECT else {}
        for delta in range(_slot_count(field, current)):
            default = current[delta].get("value") if delta < len(current) else None
            slot = widget.add(str(delta), FormNode(weight=delta))
            slot.add(
                "value",
                FormNode(
                    kind=kind,
                    required=field.required and delta == 0,
                    default_value=default,
                    attributes=dict(attributes),
                ),
            )
        return wrapper

    def extract_form_values(self, record: EditableRecord, form: FormNode, form_state: FormState) -> None:
        """把 ``form.parents`` 下的提交值写回记录, 未提交的字段保持不变."""
        base = list(form.parents or [])
        for field in self.fields:
            raw = form_state.get_value([*base, field.field_name])
            if raw is None:
                continue
            record.set_field_value(field.field_name, self._massage_items(field, raw))
            log_debug("回填字段提交值", module="forms", field=field.field_name)

    @staticmethod
    def _massage_items(field: FieldConfig, raw: Any) -> FieldValue:
        if field.widget == "boolean":
            value = raw.get("value") if isinstance(raw, Mapping) and "value" in raw else raw
            if isinstance(value, Mapping) and "value" in value:
                value = value["value"]
            return [{"value": _coerce("boolean", value)}]

        items: list[FieldItem] = []
        for entry in _iter_deltas(raw):
            item = dict(entry) if isinstance(entry, Mapping) else {"value": entry}
            value = _coerce(field.widget, item.get("value"))
            if value is None or value == "":
                continue
            item["value"] = value
            items.append(item)

        if field.cardinality != CARDINALITY_UNLIMITED:
            items = items[: max(field.cardinality, 1)]
        return items


class EntityFormDisplayProvider:
    """按记录的类型与子类型装配表单展示."""

    def __init__(self, field_definitions: FieldDefinitionsRepository) -> None:
        self._field_definitions = field_definitions

    def collect_render_display(self, record: EditableRecord, surface: str) -> EntityFormDisplay:
        fields = self._field_definitions.list_fields_for_surface(record.entity_type_id, record.bundle, surface)
        return EntityFormDisplay(fields, surface)
