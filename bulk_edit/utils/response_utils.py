"""批量编辑服务 - 统一响应工具.

提供统一的成功/错误响应结构,避免在业务层散落 JSON 拼装逻辑.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, cast
from uuid import uuid4

from flask import Response, has_request_context, jsonify, request
from werkzeug.exceptions import HTTPException

from bulk_edit.api.error_mapping import map_exception_to_status
from bulk_edit.constants import ErrorCategory, ErrorMessages, ErrorSeverity, HttpStatus, SuccessMessages
from bulk_edit.errors import AppError
from bulk_edit.utils.structlog_config import log_error, log_warning
from bulk_edit.utils.time_utils import time_utils

if TYPE_CHECKING:
    from collections.abc import Mapping

    from bulk_edit.types import JsonDict, JsonValue


@dataclass(slots=True)
class ErrorContext:
    """异常发生时采集的上下文信息."""

    error: Exception
    request: Any | None = None
    error_id: str = field(default_factory=lambda: uuid4().hex)
    timestamp: datetime = field(default_factory=time_utils.now)

    def public_context(self) -> dict[str, Any]:
        """构建可对外暴露的上下文字段."""
        if self.request is None and has_request_context():
            self.request = request
        payload: dict[str, Any] = {}
        if self.request is not None:
            payload["url"] = getattr(self.request, "url", None)
            payload["method"] = getattr(self.request, "method", None)
        return payload


def _derive_error_metadata(error: Exception) -> tuple[ErrorCategory, ErrorSeverity, str, str]:
    if isinstance(error, AppError):
        return error.category, error.severity, error.message_key, error.message

    if isinstance(error, HTTPException):
        status_code = int(error.code or HttpStatus.INTERNAL_SERVER_ERROR)
        if status_code >= HttpStatus.INTERNAL_SERVER_ERROR:
            return ErrorCategory.SYSTEM, ErrorSeverity.HIGH, "INTERNAL_ERROR", ErrorMessages.INTERNAL_ERROR
        message = error.description or ErrorMessages.INVALID_REQUEST
        return ErrorCategory.BUSINESS, ErrorSeverity.MEDIUM, "INVALID_REQUEST", message

    return ErrorCategory.SYSTEM, ErrorSeverity.HIGH, "INTERNAL_ERROR", ErrorMessages.INTERNAL_ERROR


def unified_success_response(
    data: object | None = None,
    message: object | None = None,
    *,
    status: int = HttpStatus.OK,
    meta: Mapping[str, object] | None = None,
) -> tuple[JsonDict, int]:
    """生成统一的成功响应载荷.

    Args:
        data: 响应数据,可选.
        message: 成功消息,可选,默认为"操作成功".
        status: HTTP 状态码,默认为 200.
        meta: 元数据,可选.

    Returns:
        响应载荷字典与 HTTP 状态码.

    """
    payload: JsonDict = {
        "success": True,
        "error": False,
        "message": str(message) if message is not None else SuccessMessages.OPERATION_SUCCESS,
        "timestamp": time_utils.now().isoformat(),
    }
    if data is not None:
        payload["data"] = cast("JsonValue", data)
    if meta:
        payload["meta"] = cast("JsonDict", dict(meta))
    return payload, status


def unified_error_response(
    error: BaseException,
    *,
    status_code: int | None = None,
    context: ErrorContext | None = None,
) -> tuple[JsonDict, int]:
    """生成统一的错误响应载荷并记录日志.

    Args:
        error: 异常对象.
        status_code: HTTP 状态码,可选,默认根据异常类型自动映射.
        context: 错误上下文,可选.

    Returns:
        错误响应载荷字典与 HTTP 状态码.

    """
    safe_error = error if isinstance(error, Exception) else Exception(str(error))
    context = context or ErrorContext(safe_error)
    category, severity, message_key, message = _derive_error_metadata(safe_error)
    final_status = status_code or map_exception_to_status(safe_error, default=HttpStatus.INTERNAL_SERVER_ERROR)

    payload: JsonDict = {
        "success": False,
        "error": True,
        "error_id": context.error_id,
        "category": category.value,
        "severity": severity.value,
        "message_code": message_key,
        "message": message,
        "timestamp": context.timestamp.isoformat(),
        "recoverable": severity in (ErrorSeverity.LOW, ErrorSeverity.MEDIUM),
        "context": context.public_context(),
    }
    if isinstance(safe_error, AppError) and safe_error.extra:
        payload["extra"] = cast("JsonDict", dict(safe_error.extra))

    if severity in (ErrorSeverity.HIGH, ErrorSeverity.CRITICAL):
        log_error(message, module="error_handler", exception=safe_error, error_id=context.error_id)
    else:
        log_warning(message, module="error_handler", exception=safe_error, error_id=context.error_id)
    return payload, final_status


def jsonify_unified_success(*args: object, **kwargs: object) -> tuple[Response, int]:
    """返回 Flask Response 对象的成功响应便捷函数."""
    payload, status = unified_success_response(*args, **kwargs)  # type: ignore[arg-type]
    return jsonify(payload), status

