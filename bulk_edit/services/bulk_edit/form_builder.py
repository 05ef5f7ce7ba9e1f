"""批量编辑表单构建与配置收集."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from bulk_edit.constants import BULK_EDIT_SURFACE, BulkEditKeys, BulkEditMessages, FormKind
from bulk_edit.core.form_tree import FormNode, node_at
from bulk_edit.core.host import BundleDescriptor, bundle_descriptors
from bulk_edit.core.selector import build_selector_form
from bulk_edit.services.bulk_edit.configuration import BulkEditConfiguration
from bulk_edit.utils.structlog_config import log_debug, log_info

if TYPE_CHECKING:
    from bulk_edit.core.form_state import FormState
    from bulk_edit.core.host import (
        EntityStorage,
        EntityTypeDefinition,
        EntityTypeRegistry,
        FieldDefinitionRegistry,
        FormDisplayProvider,
    )
    from bulk_edit.types import BundleData

OPTIONS_WEIGHT = -100


def _is_checked(flag: Any) -> bool:
    if isinstance(flag, str):
        return flag.strip().lower() not in {"", "0", "false", "off"}
    return bool(flag)


class BulkEditFormBuilder:
    """按 (实体类型, 子类型) 渲染批量编辑表单."""

    def __init__(
        self,
        *,
        entity_types: EntityTypeRegistry,
        storage: EntityStorage,
        field_definitions: FieldDefinitionRegistry,
        displays: FormDisplayProvider,
        surface: str = BULK_EDIT_SURFACE,
    ) -> None:
        self._entity_types = entity_types
        self._storage = storage
        self._field_definitions = field_definitions
        self._displays = displays
        self._surface = surface

    def build_bundle_forms(self, form: FormNode, form_state: FormState, bundle_data: BundleData) -> FormNode:
        """为每个被选中的 bundle 渲染一个折叠面板.

        Args:
            form: 外层表单壳, 就地填充.
            form_state: 表单状态, 记录 bundle 数据供提交阶段使用.
            bundle_data: ``{type: {bundle: label}}``.

        Returns:
            填充后的表单.

        """
        form_state.set(BulkEditKeys.BUNDLES_DATA, {key: dict(value) for key, value in bundle_data.items()})
        form.attributes.setdefault("class", []).append(BulkEditKeys.FORM_CLASS)

        options = form.add(
            BulkEditKeys.OPTIONS,
            FormNode(kind=FormKind.FIELDSET, title=BulkEditMessages.OPTIONS_TITLE, weight=OPTIONS_WEIGHT),
        )
        options.add(
            BulkEditKeys.ADD_VALUES,
            FormNode(
                kind=FormKind.CHECKBOX,
                title=BulkEditMessages.ADD_VALUES_TITLE,
                description=BulkEditMessages.ADD_VALUES_DESCRIPTION,
                default_value=False,
            ),
        )

        descriptors = bundle_descriptors(bundle_data)
        bundle_count = len(descriptors)
        definitions: dict[str, EntityTypeDefinition] = {}
        for descriptor in descriptors:
            type_id = descriptor.entity_type_id
            if type_id not in definitions:
                definitions[type_id] = self._entity_types.get_definition(type_id)
                form.add(type_id, FormNode(kind=FormKind.CONTAINER, tree=True))
            form[type_id].add(
                descriptor.bundle,
                self.get_bundle_form(definitions[type_id], descriptor, form_state, bundle_count=bundle_count),
            )

        log_debug("批量编辑表单已构建", module="bulk_edit", bundle_count=bundle_count)
        return form

    def get_bundle_form(
        self,
        definition: EntityTypeDefinition,
        descriptor: BundleDescriptor,
        form_state: FormState,
        *,
        bundle_count: int,
    ) -> FormNode:
        bundle, bundle_label = descriptor.bundle, descriptor.label
        record = self._storage.create(definition.id, {definition.bundle_key: bundle})
        title = f"{definition.label} - {bundle_label}" if bundle_label else definition.label
        bundle_form = FormNode(
            kind=FormKind.DETAILS,
            title=title,
            open=bundle_count == 1,
            tree=True,
            parents=[definition.id, bundle],
        )

        display = self._displays.collect_render_display(record, self._surface)
        display.build_form(record, bundle_form, form_state)

        selector = self.get_selector_form(definition.id, bundle, bundle_form)
        bundle_form.children = {BulkEditKeys.FIELD_SELECTOR: selector, **bundle_form.children}
        return bundle_form

    def get_selector_form(self, entity_type_id: str, bundle: str, form: FormNode) -> FormNode:
        definitions = self._field_definitions.get_field_definitions(entity_type_id, bundle)
        return build_selector_form(entity_type_id, bundle, form, definitions)

    def submit_configuration(self, form: FormNode, form_state: FormState) -> BulkEditConfiguration:
        """收集被勾选字段的提交值.

        没有勾选任何字段的 bundle 不会进入配置; 缺少 ``_field_selector``
        的提交视为未勾选.
        """
        configuration = BulkEditConfiguration(add_values=self._submitted_add_values(form_state))
        bundle_data: Mapping[str, Mapping[str, Any]] = form_state.get(BulkEditKeys.BUNDLES_DATA) or {}

        for entity_type_id, bundles in bundle_data.items():
            definition = self._entity_types.get_definition(entity_type_id)
            for bundle in bundles:
                bundle_form = node_at(form, [entity_type_id, bundle])
                submitted = form_state.get_value([entity_type_id, bundle, BulkEditKeys.FIELD_SELECTOR])
                selected = self._selected_fields(bundle_form, submitted)
                if not selected:
                    continue

                record = self._storage.create(entity_type_id, {definition.bundle_key: bundle})
                display = self._displays.collect_render_display(record, self._surface)
                display.extract_form_values(
                    record,
                    bundle_form or FormNode(parents=[entity_type_id, bundle]),
                    form_state,
                )
                for field_name in selected:
                    configuration.set_field_value(
                        entity_type_id,
                        bundle,
                        field_name,
                        record.get_field_value(field_name),
                    )

        log_info(
            "批量编辑配置已收集",
            module="bulk_edit",
            add_values=configuration.add_values,
            bundles=[f"{type_id}.{bundle}" for type_id, bundles in configuration.values.items() for bundle in bundles],
        )
        return configuration

    @staticmethod
    def _submitted_add_values(form_state: FormState) -> bool:
        value = form_state.get_value(BulkEditKeys.ADD_VALUES)
        if value is None:
            value = form_state.get_value([BulkEditKeys.OPTIONS, BulkEditKeys.ADD_VALUES], False)
        return _is_checked(value)

    @staticmethod
    def _selected_fields(bundle_form: FormNode | None, submitted: Any) -> list[str]:
        """按勾选器中的顺序返回被勾选的字段键, 勾选器中不存在的键被忽略."""
        if not isinstance(submitted, Mapping):
            return []
        checked = [key for key, flag in submitted.items() if _is_checked(flag)]
        selector = bundle_form.get(BulkEditKeys.FIELD_SELECTOR) if bundle_form is not None else None
        if selector is None:
            return checked
        return [key for key in selector.children if key in checked]
