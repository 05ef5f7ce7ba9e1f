"""
批量编辑服务 - 字段配置模型
"""

from bulk_edit import db


class FieldConfig(db.Model):
    """字段配置模型.

    描述某个 bundle 上的字段: 控件类型、基数、排序以及在哪些表单展示面上出现.

    Attributes:
        field_name: 字段机器名, 同时是表单与配置中的键.
        widget: 控件类型(string/text_long/integer/boolean/list/datetime).
        cardinality: 最大条目数, -1 表示无上限.
        display_configurable: 是否允许在表单展示中配置, 为 False 时批量编辑不提供勾选.
        form_surfaces: 字段出现的表单展示面列表.

    """

    __tablename__ = "field_configs"
    __table_args__ = (db.UniqueConstraint("content_type_id", "bundle", "field_name", name="uq_field_config"),)

    id = db.Column(db.Integer, primary_key=True)
    content_type_id = db.Column(db.String(64), db.ForeignKey("content_types.id"), nullable=False, index=True)
    bundle = db.Column(db.String(64), nullable=False, index=True)
    field_name = db.Column(db.String(64), nullable=False)
    label = db.Column(db.String(255), nullable=False)
    widget = db.Column(db.String(32), nullable=False, default="string")
    cardinality = db.Column(db.Integer, nullable=False, default=1)
    weight = db.Column(db.Integer, nullable=False, default=0)
    required = db.Column(db.Boolean, nullable=False, default=False)
    display_configurable = db.Column(db.Boolean, nullable=False, default=True)
    description = db.Column(db.Text, nullable=True)
    options = db.Column(db.JSON, nullable=True)
    form_surfaces = db.Column(db.JSON, nullable=False, default=lambda: ["default", "bulk_edit"])

    @property
    def name(self) -> str:
        return self.field_name

    def is_display_configurable(self, display_context: str) -> bool:
        """字段在给定展示上下文中是否允许配置."""
        return bool(self.display_configurable)

    def shown_on(self, surface: str) -> bool:
        return surface in (self.form_surfaces or [])

    def __repr__(self) -> str:
        return f"<FieldConfig {self.content_type_id}.{self.bundle}.{self.field_name}>"
