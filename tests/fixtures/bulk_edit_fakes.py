"""批量编辑宿主协议的内存实现, 供单元测试组装服务."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from bulk_edit.core.host import EntityTypeDefinition


@dataclass
class FakeField:
    name: str
    cardinality: int = 1
    configurable: bool = True

    def is_display_configurable(self, display_context: str) -> bool:
        return self.configurable


@dataclass(eq=False)
class FakeRecord:
    id: Any
    entity_type_id: str
    bundle: str
    values: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    new_revision: bool = False
    revision_time: Any = None
    revision_user_id: int | None = None
    revision_log: str | None = None

    def get_field_value(self, field_name):
        return [dict(item) for item in self.values.get(field_name, [])]

    def set_field_value(self, field_name, value):
        self.values[field_name] = [dict(item) for item in value]


@dataclass(eq=False)
class FakeRevisionableRecord(FakeRecord):
    def set_new_revision(self, value=True):
        self.new_revision = value

    def set_revision_creation_time(self, timestamp):
        self.revision_time = timestamp

    def set_revision_user_id(self, user_id):
        self.revision_user_id = user_id

    def set_revision_log_message(self, message):
        self.revision_log = message


class FakeEntityTypes:
    def __init__(self, *definitions: EntityTypeDefinition) -> None:
        self.definitions = {definition.id: definition for definition in definitions}

    def get_definition(self, entity_type_id):
        return self.definitions[entity_type_id]


class FakeStorage:
    """按 ID 保存记录; load_active 返回存储中的同一对象."""

    def __init__(self, *records: FakeRecord, record_cls: type[FakeRecord] = FakeRevisionableRecord) -> None:
        self.records = {record.id: record for record in records}
        self.saved: list[Any] = []
        self.loaded: list[Any] = []
        self.record_cls = record_cls
        self.fail_on_save: Exception | None = None

    def create(self, entity_type_id, values):
        return self.record_cls(id=None, entity_type_id=entity_type_id, bundle=next(iter(values.values())))

    def load_active(self, entity_type_id, record_id):
        self.loaded.append(record_id)
        return self.records[record_id]

    def save(self, record):
        if self.fail_on_save is not None:
            raise self.fail_on_save
        self.saved.append(record.id)


class FakeFieldDefinitions:
    def __init__(self, definitions: dict[tuple[str, str], dict[str, FakeField]]) -> None:
        self.definitions = definitions

    def get_field_definitions(self, entity_type_id, bundle):
        return self.definitions.get((entity_type_id, bundle), {})


class FakeCurrentUser:
    def __init__(self, user_id: int | None = 7) -> None:
        self.user_id = user_id

    def current_user_id(self):
        return self.user_id


class FakeDisplay:
    """每个字段渲染为 容器 -> 带标签的控件组 -> 0 -> value."""

    def __init__(self, labels: dict[str, str]) -> None:
        self.labels = labels

    def build_form(self, record, form, form_state):
        from bulk_edit.constants import FormKind
        from bulk_edit.core.form_tree import FormNode

        for weight, (name, label) in enumerate(self.labels.items()):
            wrapper = form.add(name, FormNode(kind=FormKind.CONTAINER, weight=weight))
            widget = wrapper.add("widget", FormNode(title=label, required=True))
            widget.add("0", FormNode()).add("value", FormNode(kind=FormKind.TEXTFIELD, required=True))

    def extract_form_values(self, record, form, form_state):
        for name in self.labels:
            raw = form_state.get_value([*(form.parents or []), name, "0", "value"])
            if raw is not None:
                record.set_field_value(name, [{"value": raw}])


class FakeDisplayProvider:
    def __init__(self, labels_by_bundle: dict[tuple[str, str], dict[str, str]]) -> None:
        self.labels_by_bundle = labels_by_bundle
        self.surfaces: list[str] = []

    def collect_render_display(self, record, surface):
        self.surfaces.append(surface)
        return FakeDisplay(self.labels_by_bundle.get((record.entity_type_id, record.bundle), {}))
