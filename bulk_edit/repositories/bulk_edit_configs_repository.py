"""批量编辑配置 Repository.

职责:
- 负责批量编辑配置的写入与读取
- 不做序列化、不返回 Response、不 commit
"""

from __future__ import annotations

from typing import cast

from bulk_edit import db
from bulk_edit.models.bulk_edit_config import BulkEditActionConfig


class BulkEditConfigsRepository:
    """批量编辑配置 Repository."""

    def get_by_id(self, config_id: int) -> BulkEditActionConfig | None:
        return cast("BulkEditActionConfig | None", db.session.get(BulkEditActionConfig, config_id))

    def add(self, config: BulkEditActionConfig) -> BulkEditActionConfig:
        db.session.add(config)
        db.session.flush()
        return config
