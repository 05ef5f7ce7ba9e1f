"""
批量编辑服务 - 内容类型模型
"""

from bulk_edit import db
from bulk_edit.core.host import EntityTypeDefinition


class ContentType(db.Model):
    """内容类型(实体类型)模型.

    Attributes:
        id: 类型机器名, 如 node.
        label: 显示名称.
        bundle_key: 子类型键名.
        revisionable: 保存时是否生成修订记录.

    """

    __tablename__ = "content_types"

    id = db.Column(db.String(64), primary_key=True)
    label = db.Column(db.String(255), nullable=False)
    bundle_key = db.Column(db.String(64), nullable=False, default="bundle")
    revisionable = db.Column(db.Boolean, nullable=False, default=True)

    bundles = db.relationship(
        "ContentBundle",
        back_populates="content_type",
        cascade="all, delete-orphan",
        order_by="ContentBundle.id",
    )

    def to_definition(self) -> EntityTypeDefinition:
        """转换为核心层使用的类型定义."""
        return EntityTypeDefinition(
            id=self.id,
            label=self.label,
            bundle_key=self.bundle_key or "bundle",
            revisionable=bool(self.revisionable),
        )

    def __repr__(self) -> str:
        return f"<ContentType {self.id}>"


class ContentBundle(db.Model):
    """内容子类型模型, 如 node 下的 page/article."""

    __tablename__ = "content_bundles"
    __table_args__ = (db.UniqueConstraint("content_type_id", "bundle", name="uq_content_bundle"),)

    id = db.Column(db.Integer, primary_key=True)
    content_type_id = db.Column(db.String(64), db.ForeignKey("content_types.id"), nullable=False, index=True)
    bundle = db.Column(db.String(64), nullable=False)
    label = db.Column(db.String(255), nullable=True)

    content_type = db.relationship("ContentType", back_populates="bundles")

    def __repr__(self) -> str:
        return f"<ContentBundle {self.content_type_id}.{self.bundle}>"
