"""批量编辑服务.

- BulkEditConfiguration: 提交后持久化的字段改动配置
- BulkEditFormBuilder: 按 bundle 渲染表单并收集配置
- BulkEditExecutor: 对单条记录回放配置
- BulkEditAction: 组合表单构建与执行
- BulkEditBatchService: 面向 API 的批量编排
"""

__all__ = [
    "BulkEditAction",
    "BulkEditBatchService",
    "BulkEditConfiguration",
    "BulkEditExecutor",
    "BulkEditFormBuilder",
    "ExecutionOutcome",
    "create_bulk_edit_action",
]

from .action import BulkEditAction, create_bulk_edit_action
from .batch_service import BulkEditBatchService
from .configuration import BulkEditConfiguration
from .executor import BulkEditExecutor, ExecutionOutcome
from .form_builder import BulkEditFormBuilder
