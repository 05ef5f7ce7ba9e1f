"""字段配置 Repository.

职责:
- 按内容类型与子类型读取字段配置, 按 weight 排序
- 不做序列化、不返回 Response、不 commit
"""

from __future__ import annotations

from typing import Any, cast

from sqlalchemy.orm import Query

from bulk_edit.models.field_config import FieldConfig


class FieldDefinitionsRepository:
    """字段配置查询 Repository."""

    @staticmethod
    def _query(entity_type_id: str, bundle: str) -> Query[Any]:
        query = cast(Query[Any], FieldConfig.query)
        return query.filter_by(content_type_id=entity_type_id, bundle=bundle).order_by(
            FieldConfig.weight.asc(),
            FieldConfig.id.asc(),
        )

    def list_fields(self, entity_type_id: str, bundle: str) -> list[FieldConfig]:
        return list(self._query(entity_type_id, bundle).all())

    def list_fields_for_surface(self, entity_type_id: str, bundle: str, surface: str) -> list[FieldConfig]:
        """返回出现在指定表单展示面上的字段."""
        return [field for field in self.list_fields(entity_type_id, bundle) if field.shown_on(surface)]

    def get_field_definitions(self, entity_type_id: str, bundle: str) -> dict[str, FieldConfig]:
        return {field.field_name: field for field in self.list_fields(entity_type_id, bundle)}
