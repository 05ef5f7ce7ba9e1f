"""
批量编辑服务 - 内容记录与修订模型
"""

from __future__ import annotations

from datetime import datetime

from bulk_edit import db
from bulk_edit.types import FieldValue
from bulk_edit.utils.time_utils import time_utils


class ContentItem(db.Model):
    """内容记录模型.

    字段值以 ``{field_name: [item, ...]}`` 的 JSON 形式保存, 每个条目是一个
    字典(通常为 ``{"value": ...}``). 修订相关属性记录最近一次修订的元信息.

    Attributes:
        entity_type_id: 所属内容类型.
        bundle: 所属子类型.
        field_values: 字段值.
        revision_id: 当前生效修订.
        revision_created_at: 当前修订创建时间.
        revision_user_id: 当前修订作者.
        revision_log: 当前修订日志.

    """

    __tablename__ = "content_items"

    id = db.Column(db.Integer, primary_key=True)
    entity_type_id = db.Column(db.String(64), db.ForeignKey("content_types.id"), nullable=False, index=True)
    bundle = db.Column(db.String(64), nullable=False, index=True)
    field_values = db.Column(db.JSON, nullable=False, default=dict)
    revision_id = db.Column(db.Integer, nullable=True)
    revision_created_at = db.Column(db.DateTime(timezone=True), nullable=True)
    revision_user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    revision_log = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=time_utils.now)
    updated_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, onupdate=time_utils.now)

    revisions = db.relationship(
        "ContentRevision",
        back_populates="item",
        cascade="all, delete-orphan",
        order_by="ContentRevision.id",
    )

    def __init__(self, entity_type_id: str, bundle: str, field_values: dict[str, FieldValue] | None = None) -> None:
        self.entity_type_id = entity_type_id
        self.bundle = bundle
        self.field_values = dict(field_values or {})

    @property
    def title(self) -> str | None:
        items = self.get_field_value("title")
        return items[0].get("value") if items else None

    def get_field_value(self, field_name: str) -> FieldValue:
        """返回字段条目列表的副本."""
        return [dict(item) for item in (self.field_values or {}).get(field_name, [])]

    def set_field_value(self, field_name: str, value: FieldValue) -> None:
        # JSON 列需要整体替换才能被 SQLAlchemy 识别为变更
        self.field_values = {**(self.field_values or {}), field_name: [dict(item) for item in value]}

    @property
    def wants_new_revision(self) -> bool:
        return bool(getattr(self, "_new_revision", False))

    def set_new_revision(self, value: bool = True) -> None:
        self._new_revision = value

    def set_revision_creation_time(self, timestamp: datetime) -> None:
        self.revision_created_at = timestamp

    def set_revision_user_id(self, user_id: int | None) -> None:
        self.revision_user_id = user_id

    def set_revision_log_message(self, message: str) -> None:
        self.revision_log = message

    def __repr__(self) -> str:
        return f"<ContentItem {self.entity_type_id}.{self.bundle}#{self.id}>"


class ContentRevision(db.Model):
    """内容修订快照."""

    __tablename__ = "content_revisions"

    id = db.Column(db.Integer, primary_key=True)
    item_id = db.Column(db.Integer, db.ForeignKey("content_items.id"), nullable=False, index=True)
    field_values = db.Column(db.JSON, nullable=False, default=dict)
    created_at = db.Column(db.DateTime(timezone=True), nullable=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    log_message = db.Column(db.Text, nullable=True)

    item = db.relationship("ContentItem", back_populates="revisions")

    def __repr__(self) -> str:
        return f"<ContentRevision {self.item_id}@{self.id}>"
