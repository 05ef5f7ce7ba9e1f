"""批量编辑服务 - 本地开发环境启动文件."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Final

from bulk_edit import create_app, db
from bulk_edit.constants import UserRole
from bulk_edit.models.user import User
from bulk_edit.utils.structlog_config import get_system_logger

if TYPE_CHECKING:
    from flask import Flask

os.environ.setdefault("FLASK_ENV", "development")

DEFAULT_HOST: Final[str] = "127.0.0.1"
DEFAULT_PORT: Final[str] = "5001"
DEFAULT_DEBUG: Final[str] = "true"


def _prepare_database(flask_app: Flask) -> None:
    """建表并确保 admin 账号存在, 避免初次启动无法调用接口.

    Args:
        flask_app: 当前的 Flask 应用实例, 用于推入 application context.

    """
    with flask_app.app_context():
        db.create_all()
        if User.query.filter_by(username="admin").first() is None:
            db.session.add(User(username="admin", role=UserRole.ADMIN))
            db.session.commit()


def _load_runtime_config() -> tuple[str, int, bool]:
    """读取开发服务器运行参数."""
    host = os.environ.get("FLASK_HOST") or DEFAULT_HOST
    port = int(os.environ.get("FLASK_PORT", DEFAULT_PORT))
    debug = os.environ.get("FLASK_DEBUG", DEFAULT_DEBUG).lower() == "true"
    return host, port, debug


def main() -> None:
    """启动 Flask 开发服务器."""
    app = create_app()
    host, port, debug = _load_runtime_config()
    _prepare_database(app)

    logger = get_system_logger()
    logger.info("批量编辑服务开发环境已启动", host=host, port=port, debug=debug)
    logger.info("访问入口", url=f"http://{host}:{port}/api/v1/")

    app.run(host=host, port=port, debug=debug, threaded=True, use_reloader=False)


if __name__ == "__main__":
    main()
