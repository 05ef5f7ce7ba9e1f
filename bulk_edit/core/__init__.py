"""批量编辑核心逻辑.

不依赖 Flask/SQLAlchemy, 只面向宿主协议(`core.host`)与渲染树(`core.form_tree`):
- form_tree: 渲染树节点与可编辑控件定位
- selector: 字段勾选器构建
- value_merger: 多值字段合并策略
"""

from bulk_edit.core.form_state import FormState
from bulk_edit.core.form_tree import FormNode, find_form_element
from bulk_edit.core.selector import build_selector_form
from bulk_edit.core.value_merger import merge_field_values

__all__ = [
    "FormNode",
    "FormState",
    "build_selector_form",
    "find_form_element",
    "merge_field_values",
]
