"""表单提交状态.

承载一次渲染/提交周期内的提交值与表单级临时存储.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any


@dataclass
class FormState:
    """提交值按路径读取, 缺失的路径一律视为未提交."""

    values: dict[str, Any] = field(default_factory=dict)
    storage: dict[str, Any] = field(default_factory=dict)

    def get_value(self, path: str | Sequence[str], default: Any = None) -> Any:
        """读取提交值.

        Args:
            path: 单个键或键路径.
            default: 路径不存在时的返回值.

        """
        keys = [path] if isinstance(path, str) else list(path)
        current: Any = self.values
        for key in keys:
            if isinstance(current, Mapping) and key in current:
                current = current[key]
            elif isinstance(current, list) and str(key).isdigit() and int(key) < len(current):
                current = current[int(key)]
            else:
                return default
        return current

    def get(self, key: str, default: Any = None) -> Any:
        """读取表单级存储."""
        return self.storage.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """写入表单级存储."""
        self.storage[key] = value
