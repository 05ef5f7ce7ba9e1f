"""宿主框架协作方协议.

批量编辑核心只通过以下协议访问宿主能力: 实体类型注册表、实体存储、
字段定义注册表、表单展示、时钟与当前用户. 具体实现见 `bulk_edit.repositories`
与 `bulk_edit.forms`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime

    from bulk_edit.core.form_state import FormState
    from bulk_edit.core.form_tree import FormNode
    from bulk_edit.types import FieldValue


@dataclass(frozen=True, slots=True)
class EntityTypeDefinition:
    """实体类型定义."""

    id: str
    label: str
    bundle_key: str = "bundle"
    revisionable: bool = False


@dataclass(frozen=True, slots=True)
class BundleDescriptor:
    """被选中记录所属的 (实体类型, 子类型, 显示名)."""

    entity_type_id: str
    bundle: str
    label: str | None = None


def bundle_descriptors(bundle_data: Mapping[str, Mapping[str, str | None]]) -> list[BundleDescriptor]:
    """把 ``{type: {bundle: label}}`` 展开为按出现顺序排列的描述对象."""
    return [
        BundleDescriptor(entity_type_id, bundle, label)
        for entity_type_id, bundles in bundle_data.items()
        for bundle, label in bundles.items()
    ]


class FieldDefinition(Protocol):
    """字段定义的最小接口."""

    @property
    def name(self) -> str: ...

    @property
    def cardinality(self) -> int: ...

    def is_display_configurable(self, display_context: str) -> bool: ...


@runtime_checkable
class EditableRecord(Protocol):
    """可编辑记录."""

    @property
    def id(self) -> Any: ...

    @property
    def entity_type_id(self) -> str: ...

    @property
    def bundle(self) -> str: ...

    def get_field_value(self, field_name: str) -> FieldValue: ...

    def set_field_value(self, field_name: str, value: FieldValue) -> None: ...


@runtime_checkable
class RevisionableRecord(EditableRecord, Protocol):
    """支持修订日志的记录."""

    def set_new_revision(self, value: bool = True) -> None: ...

    def set_revision_creation_time(self, timestamp: datetime) -> None: ...

    def set_revision_user_id(self, user_id: int | None) -> None: ...

    def set_revision_log_message(self, message: str) -> None: ...


class EntityTypeRegistry(Protocol):
    def get_definition(self, entity_type_id: str) -> EntityTypeDefinition: ...


class EntityStorage(Protocol):
    def create(self, entity_type_id: str, values: Mapping[str, Any]) -> EditableRecord: ...

    def load_active(self, entity_type_id: str, record_id: Any) -> EditableRecord: ...

    def save(self, record: EditableRecord) -> None: ...


class FieldDefinitionRegistry(Protocol):
    def get_field_definitions(self, entity_type_id: str, bundle: str) -> Mapping[str, FieldDefinition]: ...


class FormDisplay(Protocol):
    """某条记录在某个展示面上的表单构建/取值能力."""

    def build_form(self, record: EditableRecord, form: FormNode, form_state: FormState) -> None: ...

    def extract_form_values(self, record: EditableRecord, form: FormNode, form_state: FormState) -> None: ...


class FormDisplayProvider(Protocol):
    def collect_render_display(self, record: EditableRecord, surface: str) -> FormDisplay: ...


class Clock(Protocol):
    def now(self) -> datetime: ...


class CurrentUserProvider(Protocol):
    def current_user_id(self) -> int | None: ...
