"""API v1 decorators.

说明:
- API v1 的错误语义应始终为 JSON(禁止 redirect/flash)
- 统一通过 AppError 体系让全局错误处理器输出标准错误封套
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from flask import request
from flask_login import current_user

from bulk_edit.constants import ErrorMessages, UserRole
from bulk_edit.errors import AuthenticationError, AuthorizationError

P = ParamSpec("P")
R = TypeVar("R")


def _authentication_error(permission_type: str) -> AuthenticationError:
    return AuthenticationError(
        ErrorMessages.AUTHENTICATION_REQUIRED,
        message_key="AUTHENTICATION_REQUIRED",
        extra={
            "request_path": request.path,
            "request_method": request.method,
            "permission_type": permission_type,
        },
    )


def api_login_required(func: Callable[P, R]) -> Callable[P, R]:
    """要求调用者已登录(API v1 专用)."""

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        if not current_user.is_authenticated:
            raise _authentication_error("login")
        return func(*args, **kwargs)

    return wrapper


def api_permission_required(permission: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """校验指定权限(API v1 专用)."""

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            if not current_user.is_authenticated:
                raise _authentication_error(permission)
            if not UserRole.has_permission(getattr(current_user, "role", None), permission):
                raise AuthorizationError(
                    ErrorMessages.PERMISSION_REQUIRED.format(permission=permission),
                    message_key="PERMISSION_REQUIRED",
                    extra={
                        "request_path": request.path,
                        "request_method": request.method,
                        "permission_type": permission,
                        "user_role": getattr(current_user, "role", None),
                    },
                )
            return func(*args, **kwargs)

        return wrapper

    return decorator
