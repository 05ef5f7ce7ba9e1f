"""
批量编辑服务 - 批量编辑动作配置模型
"""

from bulk_edit import db
from bulk_edit.utils.time_utils import time_utils


class BulkEditActionConfig(db.Model):
    """提交后的批量编辑配置, 在批量执行阶段按记录逐条回放."""

    __tablename__ = "bulk_edit_action_configs"

    id = db.Column(db.Integer, primary_key=True)
    configuration = db.Column(db.JSON, nullable=False, default=dict)
    created_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=time_utils.now)

    def __repr__(self) -> str:
        return f"<BulkEditActionConfig {self.id}>"
