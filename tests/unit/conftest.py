# tests/unit/conftest.py
"""单元测试专用 fixtures.

提供 monkeypatch 相关的通用 fixtures.
"""

from __future__ import annotations

import datetime

import pytest


@pytest.fixture(autouse=True)
def _unit_test_env(monkeypatch):
    """为 unit tests 强制注入隔离环境变量.

    目标:
    - unit tests 不依赖外部数据库等基础设施
    - 避免开发者本机环境变量影响测试稳定性
    """
    monkeypatch.setenv("FLASK_ENV", "testing")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.delenv("BULK_EDIT_MAX_RECORDS", raising=False)


@pytest.fixture
def mock_time():
    """固定时钟, 用于测试修订时间戳."""
    fixed_time = datetime.datetime(2026, 1, 1, 12, 0, 0, tzinfo=datetime.UTC)

    class MockTime:
        @staticmethod
        def now():
            return fixed_time

    return MockTime()
