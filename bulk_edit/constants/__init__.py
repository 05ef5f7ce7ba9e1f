"""常量模块。

集中管理批量编辑服务的系统常量，包括错误消息、HTTP 状态码、用户角色与表单约定。

主要常量：
- ErrorMessages: 错误消息常量
- HttpStatus: HTTP 状态码常量
- UserRole: 用户角色常量
- BulkEditKeys: 批量编辑表单的保留键
"""

# 导入HTTP状态码常量（使用Python标准库）
from http import HTTPStatus as HttpStatus

# 导入批量编辑常量
from .bulk_edit import (
    BULK_EDIT_SURFACE,
    CARDINALITY_UNLIMITED,
    BulkEditKeys,
    BulkEditMessages,
    FormKind,
)

# 导入所有系统常量
from .system_constants import (
    ErrorCategory,
    ErrorMessages,
    ErrorSeverity,
    SuccessMessages,
)

# 导入用户角色常量
from .user_roles import UserRole

__all__ = [
    "BULK_EDIT_SURFACE",
    "CARDINALITY_UNLIMITED",
    "BulkEditKeys",
    "BulkEditMessages",
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "FormKind",
    "HttpStatus",
    "SuccessMessages",
    "UserRole",
]
