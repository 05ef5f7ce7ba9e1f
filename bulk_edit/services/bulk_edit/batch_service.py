"""批量编辑编排服务.

将 bulk edit endpoints 的记录装载、配置持久化与逐条执行下沉到 service 层:
- 按选中记录构建表单
- 收集并保存配置
- 按给定顺序逐条执行, 单条失败不影响后续记录
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from flask import current_app, has_app_context
from sqlalchemy.exc import SQLAlchemyError

from bulk_edit import db
from bulk_edit.constants import ErrorMessages
from bulk_edit.core.form_state import FormState
from bulk_edit.core.form_tree import FormNode
from bulk_edit.errors import AppError, NotFoundError, ValidationError
from bulk_edit.models.bulk_edit_config import BulkEditActionConfig
from bulk_edit.repositories import BulkEditConfigsRepository, ContentRepository, ContentTypesRepository
from bulk_edit.schemas.bulk_edit import BulkEditConfigurePayload, BulkEditRecordsPayload
from bulk_edit.schemas.validation import validate_or_raise
from bulk_edit.services.bulk_edit.action import BulkEditAction, create_bulk_edit_action
from bulk_edit.services.bulk_edit.configuration import BulkEditConfiguration
from bulk_edit.services.bulk_edit.executor import STATUS_FAILED, STATUS_MODIFIED, STATUS_SKIPPED, ExecutionOutcome
from bulk_edit.utils.structlog_config import log_info, log_warning

if TYPE_CHECKING:
    from bulk_edit.models.content_item import ContentItem
    from bulk_edit.types import BundleData

DEFAULT_MAX_RECORDS = 500


@dataclass(frozen=True, slots=True)
class BulkEditFormOutcome:
    """表单构建 endpoint 输出."""

    form: dict[str, Any]
    bundles: BundleData
    record_ids: list[int]


@dataclass(frozen=True, slots=True)
class BulkEditSaveOutcome:
    """配置保存 endpoint 输出."""

    config_id: int
    configuration: dict[str, Any]
    record_ids: list[int]


@dataclass(frozen=True, slots=True)
class BulkEditExecuteOutcome:
    """批量执行 endpoint 输出."""

    config_id: int
    results: list[dict[str, Any]]
    modified_count: int
    skipped_count: int
    failed_count: int


class BulkEditBatchService:
    """bulk edit 编排服务."""

    def __init__(
        self,
        *,
        content_repository: ContentRepository | None = None,
        content_types: ContentTypesRepository | None = None,
        configs_repository: BulkEditConfigsRepository | None = None,
        action_factory: Callable[[BulkEditConfiguration | None], BulkEditAction] = create_bulk_edit_action,
        max_records: int | None = None,
    ) -> None:
        self._content = content_repository or ContentRepository()
        self._content_types = content_types or ContentTypesRepository()
        self._configs = configs_repository or BulkEditConfigsRepository()
        self._action_factory = action_factory
        self._max_records = max_records

    @property
    def max_records(self) -> int:
        if self._max_records is not None:
            return self._max_records
        if has_app_context():
            return int(current_app.config.get("BULK_EDIT_MAX_RECORDS", DEFAULT_MAX_RECORDS))
        return DEFAULT_MAX_RECORDS

    def bundle_data_for(self, records: Sequence[ContentItem]) -> BundleData:
        """按记录出现顺序汇总 ``{type: {bundle: label}}``."""
        bundle_data: BundleData = {}
        for record in records:
            bundles = bundle_data.setdefault(record.entity_type_id, {})
            if record.bundle not in bundles:
                bundles[record.bundle] = self._content_types.get_bundle_label(record.entity_type_id, record.bundle)
        return bundle_data

    def _load_records(self, record_ids: list[int]) -> list[ContentItem]:
        if len(record_ids) > self.max_records:
            raise ValidationError(
                ErrorMessages.TOO_MANY_RECORDS.format(limit=self.max_records),
                message_key="TOO_MANY_RECORDS",
                extra={"record_count": len(record_ids), "limit": self.max_records},
            )
        return self._content.list_by_ids(record_ids)

    def _render(
        self,
        action: BulkEditAction,
        records: Sequence[ContentItem],
        values: dict[str, Any] | None = None,
    ) -> tuple[FormNode, FormState, BundleData]:
        bundle_data = self.bundle_data_for(records)
        form_state = FormState(values=dict(values or {}))
        form = action.build_form(FormNode(), form_state, bundle_data)
        return form, form_state, bundle_data

    def build_form_from_payload(self, payload: object | None) -> BulkEditFormOutcome:
        """从 payload 解析选中记录并构建表单."""
        parsed = validate_or_raise(BulkEditRecordsPayload, payload or {})
        return self.build_form(parsed.record_ids)

    def build_form(self, record_ids: list[int]) -> BulkEditFormOutcome:
        records = self._load_records(record_ids)
        form, _, bundle_data = self._render(self._action_factory(None), records)
        return BulkEditFormOutcome(form=form.to_dict(), bundles=bundle_data, record_ids=list(record_ids))

    def save_configuration_from_payload(self, payload: object | None, *, actor_id: int | None) -> BulkEditSaveOutcome:
        """从 payload 解析并保存配置."""
        parsed = validate_or_raise(BulkEditConfigurePayload, payload or {})
        return self.save_configuration(parsed.record_ids, parsed.values, actor_id=actor_id)

    def save_configuration(
        self,
        record_ids: list[int],
        values: dict[str, Any],
        *,
        actor_id: int | None,
    ) -> BulkEditSaveOutcome:
        records = self._load_records(record_ids)
        action = self._action_factory(None)
        form, form_state, _ = self._render(action, records, values)
        configuration = action.submit_configuration(form, form_state)

        config = self._configs.add(BulkEditActionConfig(configuration=configuration.to_dict(), created_by=actor_id))
        log_info(
            "批量编辑配置已保存",
            module="bulk_edit",
            config_id=config.id,
            actor_id=actor_id,
            record_count=len(records),
            empty=configuration.is_empty,
        )
        return BulkEditSaveOutcome(
            config_id=int(config.id),
            configuration=configuration.to_dict(),
            record_ids=list(record_ids),
        )

    def get_configuration(self, config_id: int) -> BulkEditActionConfig:
        config = self._configs.get_by_id(config_id)
        if config is None:
            raise NotFoundError(message_key="CONFIGURATION_NOT_FOUND", extra={"config_id": config_id})
        return config

    def execute_from_payload(
        self,
        config_id: int,
        payload: object | None,
        *,
        actor_id: int | None,
    ) -> BulkEditExecuteOutcome:
        """从 payload 解析记录并执行配置."""
        parsed = validate_or_raise(BulkEditRecordsPayload, payload or {})
        return self.execute(config_id, parsed.record_ids, actor_id=actor_id)

    def execute(self, config_id: int, record_ids: list[int], *, actor_id: int | None) -> BulkEditExecuteOutcome:
        """按给定顺序逐条执行, 每条记录在独立的 SAVEPOINT 中处理."""
        if len(record_ids) > self.max_records:
            raise ValidationError(
                ErrorMessages.TOO_MANY_RECORDS.format(limit=self.max_records),
                message_key="TOO_MANY_RECORDS",
                extra={"record_count": len(record_ids), "limit": self.max_records},
            )
        config = self.get_configuration(config_id)
        action = self._action_factory(BulkEditConfiguration.from_dict(config.configuration))

        outcomes = [self._execute_one(action, record_id) for record_id in record_ids]
        counts = {
            status: sum(1 for outcome in outcomes if outcome.status == status)
            for status in (STATUS_MODIFIED, STATUS_SKIPPED, STATUS_FAILED)
        }
        log_info(
            "批量编辑执行完成",
            module="bulk_edit",
            config_id=config_id,
            actor_id=actor_id,
            modified_count=counts[STATUS_MODIFIED],
            skipped_count=counts[STATUS_SKIPPED],
            failed_count=counts[STATUS_FAILED],
        )
        return BulkEditExecuteOutcome(
            config_id=config_id,
            results=[outcome.to_dict() for outcome in outcomes],
            modified_count=counts[STATUS_MODIFIED],
            skipped_count=counts[STATUS_SKIPPED],
            failed_count=counts[STATUS_FAILED],
        )

    def _execute_one(self, action: BulkEditAction, record_id: int) -> ExecutionOutcome:
        record = self._content.get_by_id(record_id)
        if record is None:
            return ExecutionOutcome(
                record_id=record_id,
                status=STATUS_FAILED,
                message=ErrorMessages.RECORDS_NOT_FOUND,
            )
        try:
            with db.session.begin_nested():
                return action.execute(record)
        except (AppError, SQLAlchemyError) as exc:
            log_warning(
                "单条记录批量编辑失败,继续处理后续记录",
                module="bulk_edit",
                exception=exc,
                record_id=record_id,
            )
            message = exc.message if isinstance(exc, AppError) else ErrorMessages.DATABASE_SAVE_ERROR
            return ExecutionOutcome(record_id=record_id, status=STATUS_FAILED, message=message)
