"""内容记录 Repository.

职责:
- 负责内容记录的创建、读取与写入(add/flush)
- 保存需要新修订的记录时写入修订快照
- 不做序列化、不返回 Response、不 commit
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, cast

from sqlalchemy.exc import SQLAlchemyError

from bulk_edit import db
from bulk_edit.errors import DatabaseError, NotFoundError
from bulk_edit.models.content_item import ContentItem, ContentRevision
from bulk_edit.models.content_type import ContentType
from bulk_edit.utils.structlog_config import log_error


class ContentRepository:
    """内容记录 Repository, 同时充当批量编辑的实体存储."""

    def get_by_id(self, item_id: int) -> ContentItem | None:
        return cast("ContentItem | None", db.session.get(ContentItem, item_id))

    def list_by_ids(self, item_ids: Sequence[int]) -> list[ContentItem]:
        """按传入顺序返回记录, 缺失的 ID 会抛出 NotFoundError."""
        if not item_ids:
            return []
        rows = ContentItem.query.filter(ContentItem.id.in_(list(item_ids))).all()
        by_id = {row.id: row for row in rows}
        missing = [item_id for item_id in item_ids if item_id not in by_id]
        if missing:
            raise NotFoundError(message_key="RECORDS_NOT_FOUND", extra={"missing_ids": missing})
        return [by_id[item_id] for item_id in item_ids]

    def create(self, entity_type_id: str, values: Mapping[str, Any]) -> ContentItem:
        """构造未入库的空白记录, 仅用于渲染表单."""
        content_type = db.session.get(ContentType, entity_type_id)
        bundle_key = content_type.bundle_key if content_type is not None else "bundle"
        return ContentItem(entity_type_id=entity_type_id, bundle=str(values[bundle_key]))

    def load_active(self, entity_type_id: str, item_id: int) -> ContentItem:
        """重新读取记录当前生效的修订, 丢弃会话中未提交的改动."""
        item = db.session.get(ContentItem, item_id, populate_existing=True)
        if item is None or item.entity_type_id != entity_type_id:
            raise NotFoundError(message_key="RECORDS_NOT_FOUND", extra={"missing_ids": [item_id]})
        return cast("ContentItem", item)

    def add(self, item: ContentItem) -> ContentItem:
        db.session.add(item)
        db.session.flush()
        return item

    def save(self, item: ContentItem) -> ContentItem:
        """写入记录, 需要新修订时追加修订快照."""
        try:
            db.session.add(item)
            db.session.flush()
            if item.wants_new_revision:
                revision = ContentRevision(
                    item_id=item.id,
                    field_values=dict(item.field_values or {}),
                    created_at=item.revision_created_at,
                    user_id=item.revision_user_id,
                    log_message=item.revision_log,
                )
                db.session.add(revision)
                db.session.flush()
                item.revision_id = revision.id
                item.set_new_revision(False)
                db.session.flush()
        except SQLAlchemyError as exc:
            log_error("保存内容记录失败", module="content", exception=exc, item_id=item.id)
            raise DatabaseError(message_key="DATABASE_SAVE_ERROR", extra={"item_id": item.id}) from exc
        return item
