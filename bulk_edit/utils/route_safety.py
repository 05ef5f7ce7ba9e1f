"""路由事务边界.

`safe_route_call` 包裹视图中的业务闭包: 成功时提交, 失败时回滚并记录结构化日志.
业务异常原样抛出交给统一错误封套, 未预期异常转换为携带公共文案的 SystemError.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, TypeVar, Unpack

from flask_login import current_user
from werkzeug.exceptions import HTTPException

from bulk_edit import db
from bulk_edit.errors import AppError, SystemError
from bulk_edit.utils.structlog_config import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from bulk_edit.types import ContextDict, LoggerExtra, RouteSafetyOptions

R = TypeVar("R")
LogLevel = Literal["warning", "error"]
EXPECTED_EXCEPTIONS: tuple[type[BaseException], ...] = (AppError, HTTPException)


def _actor_id() -> int | None:
    try:
        return getattr(current_user, "id", None)
    except RuntimeError:
        return None


def _log_failure(
    level: LogLevel,
    exc: BaseException,
    *,
    module: str,
    action: str,
    options: RouteSafetyOptions,
    **flags: bool,
) -> None:
    payload: ContextDict = {"module": module, "action": action}
    if options.get("include_actor", True):
        actor_id = _actor_id()
        if actor_id is not None:
            payload["actor_id"] = actor_id
    payload.update(options.get("context") or {})

    extra: LoggerExtra = options.get("extra") or {}
    logger = get_logger("app")
    getattr(logger, level)(
        f"{action}执行失败",
        **payload,
        **extra,
        error_type=exc.__class__.__name__,
        error_message=str(exc),
        **flags,
    )


def safe_route_call(
    func: Callable[[], R],
    *,
    module: str,
    action: str,
    public_error: str,
    **options: Unpack[RouteSafetyOptions],
) -> R:
    """执行视图闭包并在边界处提交或回滚.

    Args:
        func: 业务闭包, 通常捕获了请求参数.
        module: 日志模块名.
        action: 业务动作名, 例如 "execute_bulk_edit".
        public_error: 未预期异常时返回给客户端的文案.
        **options: ``context``/``extra`` 日志字段与 ``include_actor`` 开关.

    Raises:
        AppError: 业务异常原样抛出, 未预期异常包装为 SystemError.

    """
    try:
        result = func()
    except EXPECTED_EXCEPTIONS as exc:
        db.session.rollback()
        _log_failure("warning", exc, module=module, action=action, options=options)
        raise
    except Exception as exc:
        db.session.rollback()
        _log_failure("error", exc, module=module, action=action, options=options, unexpected=True)
        raise SystemError(public_error) from exc

    try:
        db.session.commit()
    except Exception as exc:
        db.session.rollback()
        _log_failure("error", exc, module=module, action=action, options=options, commit_failed=True)
        raise SystemError(public_error) from exc
    return result
