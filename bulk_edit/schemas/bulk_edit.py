"""批量编辑 payload schema."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from bulk_edit.schemas.base import PayloadSchema
from bulk_edit.schemas.validation import SchemaMessageKeyError


def _normalize_record_ids(value: Any) -> list[int]:
    if not isinstance(value, list) or not value:
        raise SchemaMessageKeyError("record_ids 不能为空", message_key="MISSING_REQUIRED_FIELDS")
    ids: list[int] = []
    for raw in value:
        if isinstance(raw, bool):
            raise SchemaMessageKeyError("record_ids 必须为整数列表", message_key="VALIDATION_ERROR")
        try:
            record_id = int(raw)
        except (TypeError, ValueError):
            raise SchemaMessageKeyError("record_ids 必须为整数列表", message_key="VALIDATION_ERROR") from None
        if record_id not in ids:
            ids.append(record_id)
    return ids


class BulkEditRecordsPayload(PayloadSchema):
    """选中记录 payload, 去重并保持顺序."""

    record_ids: list[int]

    @field_validator("record_ids", mode="before")
    @classmethod
    def _parse_record_ids(cls, value: Any) -> list[int]:
        return _normalize_record_ids(value)


class BulkEditConfigurePayload(BulkEditRecordsPayload):
    """配置表单提交 payload.

    ``values`` 的结构与表单树一致: ``{type: {bundle: {...}}, "options": {...}}``.
    """

    values: dict[str, Any] = Field(default_factory=dict)

    @field_validator("values", mode="before")
    @classmethod
    def _parse_values(cls, value: Any) -> dict[str, Any]:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise SchemaMessageKeyError("values 必须为对象", message_key="VALIDATION_ERROR")
        return value
