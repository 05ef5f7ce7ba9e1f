"""渲染树节点与可编辑控件定位.

渲染树是宿主表单管线产出的有序嵌套结构. 核心逻辑只读写节点的
``title``/``access`` 等少量属性, 其余属性原样交回渲染层.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

from bulk_edit.constants import FormKind

LAYOUT_KINDS = FormKind.layout_kinds()


@dataclass(eq=False)
class FormNode:
    """渲染树节点.

    Attributes:
        kind: 节点类型; 为空或属于布局类型时不是可编辑控件.
        title: 标签文本.
        access: 显式为 False 时节点不渲染.
        weight: 排序权重.
        required: 是否必填.
        tree: 提交值是否保留嵌套结构.
        parents: 提交值在表单状态中的路径.
        states: 条件显示规则, 例如 ``{"visible": {selector: {"checked": True}}}``.
        value: ``html_tag``/``markup`` 节点的内容.
        children: 有序子节点.

    """

    kind: str | None = None
    title: str | None = None
    access: bool | None = None
    weight: int | None = None
    required: bool = False
    tree: bool = False
    parents: list[str] | None = None
    states: dict[str, Any] = field(default_factory=dict)
    description: str | None = None
    default_value: Any = None
    value: Any = None
    open: bool | None = None
    attributes: dict[str, Any] = field(default_factory=dict)
    children: dict[str, FormNode] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.kind, FormKind):
            self.kind = self.kind.value

    @property
    def is_control(self) -> bool:
        """是否为真实可编辑控件."""
        return self.kind is not None and self.kind not in LAYOUT_KINDS

    @property
    def is_visible(self) -> bool:
        return self.access is not False

    def add(self, key: str, node: FormNode) -> FormNode:
        """追加子节点并返回该子节点."""
        self.children[key] = node
        return node

    def get(self, key: str) -> FormNode | None:
        return self.children.get(key)

    def __getitem__(self, key: str) -> FormNode:
        return self.children[key]

    def __contains__(self, key: object) -> bool:
        return key in self.children

    def to_dict(self) -> dict[str, Any]:
        """序列化为 JSON 友好的字典, 省略空属性."""
        payload: dict[str, Any] = {}
        for name in ("kind", "title", "access", "weight", "description", "default_value", "value", "open"):
            attr = getattr(self, name)
            if attr is not None:
                payload[name] = attr
        if self.required:
            payload["required"] = True
        if self.tree:
            payload["tree"] = True
        if self.parents is not None:
            payload["parents"] = list(self.parents)
        if self.states:
            payload["states"] = self.states
        if self.attributes:
            payload["attributes"] = self.attributes
        if self.children:
            payload["children"] = {key: child.to_dict() for key, child in self.children.items()}
        return payload


def visible_children(node: FormNode) -> Iterator[tuple[str, FormNode]]:
    """按声明顺序遍历未被显式隐藏的直接子节点."""
    for key, child in node.children.items():
        if child.is_visible:
            yield key, child


def node_at(root: FormNode, path: Sequence[str]) -> FormNode | None:
    """按键路径取节点, 路径不存在时返回 None."""
    node: FormNode | None = root
    for key in path:
        if node is None:
            return None
        node = node.get(key)
    return node


def _html_tag_title(node: FormNode) -> str | None:
    title_node = node.get("title")
    if title_node is not None and title_node.kind == FormKind.HTML_TAG.value and title_node.value:
        return str(title_node.value)
    return None


def find_form_element(form: FormNode, title: str | None = None) -> FormNode | None:
    """查找子树中第一个真实可编辑控件.

    先序深度优先遍历, 子节点按声明顺序访问. 遍历过程中携带最近一次出现的
    非空标题: 某个子节点声明的标题同样会作用于其后的兄弟节点. 命中的控件
    若缺少标题, 会就地补上携带的标题.

    Args:
        form: 待搜索的子树根节点.
        title: 从祖先节点继承下来的标题.

    Returns:
        命中控件的引用(与树中节点为同一对象), 不存在时返回 None.

    """
    for child in form.children.values():
        if child.title:
            title = child.title
        else:
            title = _html_tag_title(child) or title

        if child.is_control:
            if not child.title and title:
                child.title = title
            return child

        if child.children:
            element = find_form_element(child, title)
            if element is not None:
                return element
    return None
