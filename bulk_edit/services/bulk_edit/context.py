"""执行期上下文: 当前用户."""

from __future__ import annotations

from flask_login import current_user


class FlaskLoginUserProvider:
    """从 Flask-Login 会话读取当前用户 ID, 请求上下文之外返回 None."""

    def current_user_id(self) -> int | None:
        try:
            if not current_user.is_authenticated:
                return None
            return int(current_user.id)
        except (AttributeError, RuntimeError):
            return None
