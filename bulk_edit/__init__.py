"""批量编辑服务 - Flask 应用初始化.

对一组内容记录按子类型展示字段表单, 收集勾选的字段改动后逐条回放.
"""

import logging
from functools import lru_cache
from importlib import import_module
from typing import TYPE_CHECKING

from flask import Flask, jsonify, request
from flask.typing import ResponseReturnValue
from flask_login import LoginManager
from flask_sqlalchemy import SQLAlchemy

from bulk_edit.settings import Settings

if TYPE_CHECKING:
    from bulk_edit.models.user import User

# 初始化扩展
db = SQLAlchemy()
login_manager = LoginManager()


@lru_cache(maxsize=1)
def get_user_model() -> type["User"]:
    """延迟加载 User 模型,避免循环导入."""
    return import_module("bulk_edit.models.user").User


def create_app(*, settings: Settings | None = None) -> Flask:
    """创建Flask应用实例.

    Args:
        settings: 可选的配置对象,用于测试或多环境启动.

    Returns:
        Flask: Flask应用实例

    """
    from bulk_edit.utils.response_utils import ErrorContext, unified_error_response
    from bulk_edit.utils.structlog_config import configure_structlog

    resolved_settings = settings or Settings.load()
    app = Flask(__name__)

    # 配置应用
    configure_app(app, resolved_settings)

    # 初始化扩展
    initialize_extensions(app, resolved_settings)

    # 注册蓝图
    configure_blueprints(app, resolved_settings)

    # 配置统一日志系统
    configure_structlog(app)

    # 设置全局日志级别
    log_level_name = str(app.config.get("LOG_LEVEL", "INFO"))
    logging.getLogger().setLevel(getattr(logging, log_level_name, logging.INFO))

    # 注册全局错误处理器
    @app.errorhandler(Exception)
    def handle_global_exception(error: Exception) -> ResponseReturnValue:
        """全局错误处理."""
        payload, status_code = unified_error_response(error, context=ErrorContext(error, request))
        return jsonify(payload), status_code

    return app


def configure_app(app: Flask, settings: Settings) -> None:
    """写入 Settings 提供的配置.

    Args:
        app: Flask 应用实例.
        settings: 统一配置对象,包含环境变量解析、默认值与校验结果.

    """
    app.config.from_mapping(settings.to_flask_config())
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SAMESITE"] = "Lax"
    app.config["SESSION_COOKIE_NAME"] = "bulk_edit_session"
    # 渲染树按键的声明顺序输出
    app.json.sort_keys = False  # type: ignore[attr-defined]


def initialize_extensions(app: Flask, settings: Settings) -> None:
    """初始化数据库与登录扩展.

    Args:
        app: Flask 应用实例.
        settings: 统一配置对象,用于扩展初始化参数注入.

    """
    db.init_app(app)

    login_manager.init_app(app)
    login_manager.session_protection = "basic"
    login_manager.remember_cookie_duration = settings.session_lifetime_seconds
    login_manager.remember_cookie_httponly = True

    @login_manager.user_loader
    def load_user(user_id: str) -> "User | None":
        user_model = get_user_model()
        return db.session.get(user_model, int(user_id))


def configure_blueprints(app: Flask, settings: Settings) -> None:
    """注册 API 蓝图.

    Args:
        app: Flask 应用实例.
        settings: 统一配置对象,决定是否开放文档.

    """
    from bulk_edit.api.v1 import create_api_v1_blueprint

    app.register_blueprint(create_api_v1_blueprint(settings), url_prefix="/api/v1")
