"""批量编辑配置."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from bulk_edit.constants import BulkEditKeys
from bulk_edit.types import FieldValue


@dataclass
class BulkEditConfiguration:
    """按 ``values[type][bundle][field]`` 保存的字段新值, 以及是否追加多值字段.

    字典保持插入顺序, 执行时按该顺序写入字段.
    """

    values: dict[str, dict[str, dict[str, FieldValue]]] = field(default_factory=dict)
    add_values: bool = False

    def bundle_values(self, entity_type_id: str, bundle: str) -> dict[str, FieldValue] | None:
        return self.values.get(entity_type_id, {}).get(bundle)

    def set_field_value(self, entity_type_id: str, bundle: str, field_name: str, value: FieldValue) -> None:
        bundles = self.values.setdefault(entity_type_id, {})
        bundles.setdefault(bundle, {})[field_name] = [dict(item) for item in value]

    @property
    def is_empty(self) -> bool:
        return not any(fields for bundles in self.values.values() for fields in bundles.values())

    def to_dict(self) -> dict[str, Any]:
        """序列化为持久化结构 ``{type: {bundle: {...}}, "_add_values": bool}``."""
        payload: dict[str, Any] = {
            entity_type_id: {
                bundle: {name: [dict(item) for item in items] for name, items in fields.items()}
                for bundle, fields in bundles.items()
            }
            for entity_type_id, bundles in self.values.items()
        }
        payload[BulkEditKeys.ADD_VALUES] = self.add_values
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any] | None) -> BulkEditConfiguration:
        configuration = cls(add_values=bool((payload or {}).get(BulkEditKeys.ADD_VALUES, False)))
        for entity_type_id, bundles in (payload or {}).items():
            if entity_type_id == BulkEditKeys.ADD_VALUES or not isinstance(bundles, Mapping):
                continue
            for bundle, fields in bundles.items():
                if not isinstance(fields, Mapping):
                    continue
                for field_name, items in fields.items():
                    configuration.set_field_value(entity_type_id, bundle, field_name, list(items or []))
        return configuration
