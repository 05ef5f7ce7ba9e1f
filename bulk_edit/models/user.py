"""批量编辑服务 - 用户模型."""

from flask_login import UserMixin

from bulk_edit import db
from bulk_edit.constants import UserRole
from bulk_edit.utils.time_utils import time_utils


class User(UserMixin, db.Model):
    """用户模型.

    继承 Flask-Login 的 UserMixin 提供会话管理功能, 作为修订记录的作者来源.

    Attributes:
        id: 用户 ID,主键.
        username: 用户名,唯一索引.
        role: 用户角色,可选值:admin、editor、viewer.
        created_at: 创建时间.
        is_active: 是否启用.

    """

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(255), unique=True, nullable=False, index=True)
    role = db.Column(db.String(50), nullable=False, default=UserRole.EDITOR)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=time_utils.now)
    is_active: bool = db.Column(db.Boolean, default=True, nullable=False)  # pyright: ignore[reportIncompatibleMethodOverride]

    def __init__(self, username: str, role: str = UserRole.EDITOR) -> None:
        self.username = username
        self.role = role

    def has_permission(self, permission: str) -> bool:
        """检查用户是否具备指定权限."""
        return UserRole.has_permission(self.role, permission)

    def __repr__(self) -> str:
        return f"<User {self.username}>"
