"""
批量编辑常量

表单保留键、渲染控件类型以及执行结果文案。
"""

from enum import Enum

# 批量编辑使用的表单展示面(form mode)
BULK_EDIT_SURFACE = "bulk_edit"

# 字段基数无上限的哨兵值
CARDINALITY_UNLIMITED = -1


class BulkEditKeys:
    """批量编辑表单与配置中的保留键."""

    FIELD_SELECTOR = "_field_selector"
    ADD_VALUES = "_add_values"
    OPTIONS = "options"
    REVISION_LOG = "revision_log"
    BUNDLES_DATA = "bulk_edit_bundles_data"
    FORM_CLASS = "bulk-edit-form"
    SELECTOR_CLASS = "bulk-edit-selector-fieldset"


class FormKind(str, Enum):
    """渲染树节点类型.

    布局类节点只负责组织结构, 其余类型均为真实可编辑控件.
    """

    CONTAINER = "container"
    DETAILS = "details"
    FIELDSET = "fieldset"
    ITEM = "item"
    MARKUP = "markup"
    HTML_TAG = "html_tag"
    TEXTFIELD = "textfield"
    TEXTAREA = "textarea"
    NUMBER = "number"
    CHECKBOX = "checkbox"
    SELECT = "select"
    DATE = "date"

    @classmethod
    def layout_kinds(cls) -> frozenset[str]:
        """返回布局类节点类型集合."""
        return frozenset(
            kind.value
            for kind in (cls.CONTAINER, cls.DETAILS, cls.FIELDSET, cls.ITEM, cls.MARKUP, cls.HTML_TAG)
        )


class BulkEditMessages:
    """面向操作者的文案."""

    SELECTOR_TITLE = "Select fields to change"
    SELECTOR_EMPTY_TITLE = "There are no fields available to modify"
    OPTIONS_TITLE = "Options"
    ADD_VALUES_TITLE = "Add values to multi-value fields"
    ADD_VALUES_DESCRIPTION = (
        "New values of multi-value fields will be added to the existing ones instead of overwriting them."
    )
    OUTCOME_SKIPPED = "Skip (field is not present on this bundle)"
    OUTCOME_MODIFIED = "Modify field values"
    REVISION_LOG_SINGULAR = "Edited as a part of bulk operation. Field changed: {fields}"
    REVISION_LOG_PLURAL = "Edited as a part of bulk operation. Fields changed: {fields}"
