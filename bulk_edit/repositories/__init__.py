"""数据访问 Repository 层.

职责:
- 负责 Query 组装与数据库读写(add/flush)
- 不做序列化、不返回 Response、不 commit
"""

__all__ = [
    "BulkEditConfigsRepository",
    "ContentRepository",
    "ContentTypesRepository",
    "FieldDefinitionsRepository",
    "HealthRepository",
]

from .bulk_edit_configs_repository import BulkEditConfigsRepository
from .content_repository import ContentRepository
from .content_types_repository import ContentTypesRepository
from .field_definitions_repository import FieldDefinitionsRepository
from .health_repository import HealthRepository
