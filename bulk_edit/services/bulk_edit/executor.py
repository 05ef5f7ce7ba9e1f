"""对单条记录回放批量编辑配置."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

from bulk_edit.constants import BulkEditKeys, BulkEditMessages
from bulk_edit.core.host import RevisionableRecord
from bulk_edit.core.value_merger import merge_field_values
from bulk_edit.utils.structlog_config import log_info, log_warning

if TYPE_CHECKING:
    from collections.abc import Mapping

    from bulk_edit.core.host import (
        Clock,
        CurrentUserProvider,
        EditableRecord,
        EntityStorage,
        EntityTypeRegistry,
        FieldDefinitionRegistry,
    )
    from bulk_edit.services.bulk_edit.configuration import BulkEditConfiguration
    from bulk_edit.types import FieldValue

STATUS_MODIFIED = "modified"
STATUS_SKIPPED = "skipped"
STATUS_FAILED = "failed"

# 字段定义缺失时按单值字段处理
DEFAULT_CARDINALITY = 1


@dataclass(frozen=True, slots=True)
class ExecutionOutcome:
    """单条记录的执行结果."""

    record_id: Any
    status: Literal["modified", "skipped", "failed"]
    message: str
    changed_fields: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "record_id": self.record_id,
            "status": self.status,
            "message": self.message,
            "changed_fields": list(self.changed_fields),
        }


def build_revision_log_message(field_values: Mapping[str, FieldValue]) -> str:
    """生成修订日志: 显式提交的 revision_log 优先, 否则列出改动字段."""
    explicit = field_values.get(BulkEditKeys.REVISION_LOG) or []
    if explicit and explicit[0].get("value"):
        return str(explicit[0]["value"])

    names = list(field_values)
    template = BulkEditMessages.REVISION_LOG_SINGULAR if len(names) == 1 else BulkEditMessages.REVISION_LOG_PLURAL
    return template.format(fields=", ".join(names))


class BulkEditExecutor:
    """把配置中的字段值写入记录并保存."""

    def __init__(
        self,
        *,
        entity_types: EntityTypeRegistry,
        storage: EntityStorage,
        field_definitions: FieldDefinitionRegistry,
        clock: Clock,
        current_user: CurrentUserProvider,
    ) -> None:
        self._entity_types = entity_types
        self._storage = storage
        self._field_definitions = field_definitions
        self._clock = clock
        self._current_user = current_user

    def execute(self, record: EditableRecord, configuration: BulkEditConfiguration) -> ExecutionOutcome:
        """对单条记录执行批量编辑.

        Args:
            record: 待处理记录, 执行前会重新读取其当前生效版本.
            configuration: 提交后的配置.

        Returns:
            执行结果; 配置中没有该记录 bundle 时为 skipped.

        Raises:
            AppError: 保存失败时由存储层抛出, 不在此处吞掉.

        """
        record = self._storage.load_active(record.entity_type_id, record.id)
        field_values = configuration.bundle_values(record.entity_type_id, record.bundle)
        if not field_values:
            log_info(
                "记录所属 bundle 不在配置中,跳过",
                module="bulk_edit",
                record_id=record.id,
                entity_type_id=record.entity_type_id,
                bundle=record.bundle,
            )
            return ExecutionOutcome(
                record_id=record.id,
                status=STATUS_SKIPPED,
                message=BulkEditMessages.OUTCOME_SKIPPED,
            )

        definitions = self._field_definitions.get_field_definitions(record.entity_type_id, record.bundle)
        for field_name, submitted in field_values.items():
            definition = definitions.get(field_name)
            if definition is None:
                log_warning("字段定义不存在,按单值字段覆盖", module="bulk_edit", field=field_name)
            cardinality = definition.cardinality if definition is not None else DEFAULT_CARDINALITY
            value = merge_field_values(
                record.get_field_value(field_name),
                submitted,
                cardinality,
                append=configuration.add_values,
            )
            record.set_field_value(field_name, value)

        entity_type = self._entity_types.get_definition(record.entity_type_id)
        if entity_type.revisionable and isinstance(record, RevisionableRecord):
            record.set_new_revision(True)
            record.set_revision_creation_time(self._clock.now())
            record.set_revision_user_id(self._current_user.current_user_id())
            record.set_revision_log_message(build_revision_log_message(field_values))

        self._storage.save(record)
        log_info(
            "记录字段已批量更新",
            module="bulk_edit",
            record_id=record.id,
            entity_type_id=record.entity_type_id,
            bundle=record.bundle,
            fields=list(field_values),
            add_values=configuration.add_values,
        )
        return ExecutionOutcome(
            record_id=record.id,
            status=STATUS_MODIFIED,
            message=BulkEditMessages.OUTCOME_MODIFIED,
            changed_fields=tuple(field_values),
        )
