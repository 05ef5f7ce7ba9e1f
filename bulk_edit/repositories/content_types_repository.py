"""内容类型 Repository.

职责:
- 提供实体类型定义与子类型标签的读取
- 不做序列化、不返回 Response、不 commit
"""

from __future__ import annotations

from typing import cast

from bulk_edit import db
from bulk_edit.core.host import EntityTypeDefinition
from bulk_edit.errors import NotFoundError
from bulk_edit.models.content_type import ContentBundle, ContentType


class ContentTypesRepository:
    """内容类型查询 Repository, 作为实体类型注册表使用."""

    def get_by_id(self, entity_type_id: str) -> ContentType | None:
        return cast("ContentType | None", db.session.get(ContentType, entity_type_id))

    def get_definition(self, entity_type_id: str) -> EntityTypeDefinition:
        content_type = self.get_by_id(entity_type_id)
        if content_type is None:
            raise NotFoundError(
                message_key="CONTENT_TYPE_NOT_FOUND",
                extra={"entity_type_id": entity_type_id},
            )
        return content_type.to_definition()

    def get_bundle_label(self, entity_type_id: str, bundle: str) -> str | None:
        row = ContentBundle.query.filter_by(content_type_id=entity_type_id, bundle=bundle).first()
        if row is None:
            return None
        return cast("str | None", row.label)
