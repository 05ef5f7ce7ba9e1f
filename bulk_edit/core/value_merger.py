"""多值字段合并策略."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bulk_edit.constants import CARDINALITY_UNLIMITED

if TYPE_CHECKING:
    from bulk_edit.types import FieldValue


def is_multi_value(cardinality: int) -> bool:
    return cardinality == CARDINALITY_UNLIMITED or cardinality > 1


def merge_field_values(
    current: FieldValue,
    submitted: FieldValue,
    cardinality: int,
    *,
    append: bool,
) -> FieldValue:
    """计算写回字段的值.

    追加模式且字段允许多值时, 把提交的条目依次追加到现有条目之后, 条目数
    达到基数上限即停止; 其余情况直接以提交值覆盖.

    Args:
        current: 字段现有条目.
        submitted: 提交的新条目.
        cardinality: 字段基数, ``CARDINALITY_UNLIMITED`` 表示无上限.
        append: 是否启用追加模式.

    Returns:
        新的条目列表.

    """
    if not append or not is_multi_value(cardinality):
        return list(submitted)

    merged = list(current)
    for item in submitted:
        if cardinality != CARDINALITY_UNLIMITED and len(merged) >= cardinality:
            break
        merged.append(item)
    return merged
