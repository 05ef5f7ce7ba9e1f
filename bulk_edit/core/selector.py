"""字段勾选器构建.

为 bundle 表单中的每个可配置字段生成一个勾选框, 并把原字段的显示
条件绑定到对应勾选框上. 勾选器的键与字段键一一对应.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from bulk_edit.constants import BulkEditKeys, BulkEditMessages, FormKind
from bulk_edit.core.form_tree import FormNode, find_form_element, visible_children

if TYPE_CHECKING:
    from bulk_edit.core.host import FieldDefinition

# 字段定义中用于判断是否允许配置的展示上下文
FORM_DISPLAY_CONTEXT = "form"
SELECTOR_WEIGHT = -50


def selector_input_name(entity_type_id: str, bundle: str, key: str) -> str:
    """勾选框在提交数据中的 name 属性."""
    return f"{entity_type_id}[{bundle}][{BulkEditKeys.FIELD_SELECTOR}][{key}]"


def visibility_rule(entity_type_id: str, bundle: str, key: str) -> dict[str, dict[str, dict[str, bool]]]:
    """仅在对应勾选框被选中时显示字段."""
    selector = f'[name="{selector_input_name(entity_type_id, bundle, key)}"]'
    return {"visible": {selector: {"checked": True}}}


def build_selector_form(
    entity_type_id: str,
    bundle: str,
    form: FormNode,
    definitions: Mapping[str, FieldDefinition],
) -> FormNode:
    """为 bundle 表单构建字段勾选器.

    会就地修改 ``form``: 不可配置字段的控件被隐藏, 可配置字段的控件取消必填
    并绑定显示条件.

    Args:
        entity_type_id: 实体类型 ID.
        bundle: 子类型 ID.
        form: 已由展示层填充字段的 bundle 表单.
        definitions: 该 bundle 的字段定义.

    Returns:
        ``_field_selector`` 字段集节点, 条目顺序与 ``form`` 直接子节点顺序一致.

    """
    selector = FormNode(
        kind=FormKind.FIELDSET,
        title=BulkEditMessages.SELECTOR_TITLE,
        weight=SELECTOR_WEIGHT,
        tree=True,
        attributes={"class": [BulkEditKeys.SELECTOR_CLASS]},
    )

    for key, wrapper in list(visible_children(form)):
        if key == BulkEditKeys.FIELD_SELECTOR:
            continue
        element = find_form_element(wrapper)
        if element is None:
            continue

        definition = definitions.get(key)
        if definition is None or not definition.is_display_configurable(FORM_DISPLAY_CONTEXT):
            element.access = False
            continue

        element.required = False
        element.tree = True

        selector.add(
            key,
            FormNode(
                kind=FormKind.CHECKBOX,
                title=element.title,
                weight=element.weight if element.weight is not None else wrapper.weight or 0,
                tree=True,
            ),
        )
        wrapper.states = visibility_rule(entity_type_id, bundle, key)

    if not selector.children:
        selector.title = BulkEditMessages.SELECTOR_EMPTY_TITLE

    return selector
