"""批量编辑动作: 组合表单构建与执行."""

from __future__ import annotations

from typing import TYPE_CHECKING

from flask import current_app, has_app_context

from bulk_edit.constants import BULK_EDIT_SURFACE
from bulk_edit.services.bulk_edit.configuration import BulkEditConfiguration

if TYPE_CHECKING:
    from bulk_edit.core.form_state import FormState
    from bulk_edit.core.form_tree import FormNode
    from bulk_edit.core.host import EditableRecord
    from bulk_edit.services.bulk_edit.executor import BulkEditExecutor, ExecutionOutcome
    from bulk_edit.services.bulk_edit.form_builder import BulkEditFormBuilder
    from bulk_edit.types import BundleData


class BulkEditAction:
    """持有表单构建器、执行器与当前配置."""

    def __init__(
        self,
        form_builder: BulkEditFormBuilder,
        executor: BulkEditExecutor,
        configuration: BulkEditConfiguration | None = None,
    ) -> None:
        self.form_builder = form_builder
        self.executor = executor
        self.configuration = configuration or BulkEditConfiguration()

    def build_form(self, form: FormNode, form_state: FormState, bundle_data: BundleData) -> FormNode:
        return self.form_builder.build_bundle_forms(form, form_state, bundle_data)

    def submit_configuration(self, form: FormNode, form_state: FormState) -> BulkEditConfiguration:
        self.configuration = self.form_builder.submit_configuration(form, form_state)
        return self.configuration

    def execute(self, record: EditableRecord) -> ExecutionOutcome:
        return self.executor.execute(record, self.configuration)


def _resolve_surface() -> str:
    if has_app_context():
        return str(current_app.config.get("BULK_EDIT_SURFACE") or BULK_EDIT_SURFACE)
    return BULK_EDIT_SURFACE


def create_bulk_edit_action(
    configuration: BulkEditConfiguration | None = None,
    *,
    surface: str | None = None,
) -> BulkEditAction:
    """用数据库实现装配批量编辑动作."""
    from bulk_edit.forms.display import EntityFormDisplayProvider
    from bulk_edit.repositories import ContentRepository, ContentTypesRepository, FieldDefinitionsRepository
    from bulk_edit.services.bulk_edit.context import FlaskLoginUserProvider
    from bulk_edit.services.bulk_edit.executor import BulkEditExecutor
    from bulk_edit.services.bulk_edit.form_builder import BulkEditFormBuilder
    from bulk_edit.utils.time_utils import time_utils

    entity_types = ContentTypesRepository()
    storage = ContentRepository()
    field_definitions = FieldDefinitionsRepository()
    form_builder = BulkEditFormBuilder(
        entity_types=entity_types,
        storage=storage,
        field_definitions=field_definitions,
        displays=EntityFormDisplayProvider(field_definitions),
        surface=surface or _resolve_surface(),
    )
    executor = BulkEditExecutor(
        entity_types=entity_types,
        storage=storage,
        field_definitions=field_definitions,
        clock=time_utils,
        current_user=FlaskLoginUserProvider(),
    )
    return BulkEditAction(form_builder, executor, configuration)
