"""数据模型模块.

定义批量编辑宿主侧的数据库模型.

主要模型:
- User: 用户模型
- ContentType: 内容类型(实体类型)模型
- ContentBundle: 内容子类型模型
- FieldConfig: 字段配置模型
- ContentItem: 内容记录模型
- ContentRevision: 内容修订模型
- BulkEditActionConfig: 批量编辑动作配置模型
"""

__all__ = [
    "BulkEditActionConfig",
    "ContentBundle",
    "ContentItem",
    "ContentRevision",
    "ContentType",
    "FieldConfig",
    "User",
]

from .bulk_edit_config import BulkEditActionConfig
from .content_item import ContentItem, ContentRevision
from .content_type import ContentBundle, ContentType
from .field_config import FieldConfig
from .user import User
