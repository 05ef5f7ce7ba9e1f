"""批量编辑服务 - 常量定义模块

统一管理所有魔法数字、硬编码值和配置常量.
"""

from enum import Enum


class ErrorCategory(Enum):
    """错误分类枚举."""

    VALIDATION = "validation"
    BUSINESS = "business"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    DATABASE = "database"
    SYSTEM = "system"


class ErrorSeverity(Enum):
    """错误严重程度枚举."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# 错误消息常量
class ErrorMessages:
    """错误消息常量."""

    # 通用错误
    INTERNAL_ERROR = "服务器内部错误"
    VALIDATION_ERROR = "数据验证失败"
    PERMISSION_DENIED = "权限不足"
    PERMISSION_REQUIRED = "需要 {permission} 权限"
    RESOURCE_NOT_FOUND = "资源不存在"
    INVALID_REQUEST = "无效的请求"
    AUTHENTICATION_REQUIRED = "请先登录"
    MISSING_REQUIRED_FIELDS = "缺少必需字段: {fields}"

    # 数据库错误
    DATABASE_QUERY_ERROR = "数据库查询错误"
    DATABASE_SAVE_ERROR = "数据保存失败"
    CONSTRAINT_VIOLATION = "数据约束错误"

    # 批量编辑错误
    CONTENT_TYPE_NOT_FOUND = "内容类型不存在"
    RECORDS_NOT_FOUND = "未找到任何内容记录"
    CONFIGURATION_NOT_FOUND = "批量编辑配置不存在"
    TOO_MANY_RECORDS = "单次批量编辑最多支持 {limit} 条记录"


# 成功消息常量
class SuccessMessages:
    """成功消息常量."""

    OPERATION_SUCCESS = "操作成功"
    FORM_BUILT = "批量编辑表单已生成"
    CONFIGURATION_SAVED = "批量编辑配置已保存"
    BULK_EDIT_EXECUTED = "批量编辑执行完成"
