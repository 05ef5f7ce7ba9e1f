from __future__ import annotations

import ast
import re
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]
PACKAGE_ROOT = REPO_ROOT / "bulk_edit"

ENV_READ_PATTERN = re.compile(r"\bos\.(?:environ\.get|getenv)\(")
FRAMEWORK_MODULES = ("flask", "flask_login", "flask_restx", "flask_sqlalchemy", "sqlalchemy")


def _scan_lines(path: Path, pattern: re.Pattern[str]) -> list[str]:
    try:
        content = path.read_text(encoding="utf-8", errors="ignore")
    except OSError:
        return []

    display_path = path.relative_to(REPO_ROOT)
    return [
        f"{display_path}:{lineno}: {line.strip()}"
        for lineno, line in enumerate(content.splitlines(), start=1)
        if pattern.search(line)
    ]


def _parse(path: Path) -> ast.AST:
    try:
        return ast.parse(path.read_text(encoding="utf-8", errors="ignore"))
    except SyntaxError as exc:
        pytest.fail(f"无法解析 Python 文件, 门禁无法执行: {path.relative_to(REPO_ROOT)}: {exc}")


def _session_write_calls(path: Path) -> list[str]:
    matches: list[str] = []
    for node in ast.walk(_parse(path)):
        if not isinstance(node, ast.Call):
            continue
        func = node.func
        if (
            isinstance(func, ast.Attribute)
            and func.attr in {"commit", "rollback"}
            and isinstance(func.value, ast.Attribute)
            and func.value.attr == "session"
        ):
            matches.append(f"{path.relative_to(REPO_ROOT)}:{node.lineno}: session.{func.attr}()")
    return matches


def _framework_imports(path: Path) -> list[str]:
    matches: list[str] = []
    for node in ast.walk(_parse(path)):
        names: list[str] = []
        if isinstance(node, ast.Import):
            names = [alias.name for alias in node.names]
        elif isinstance(node, ast.ImportFrom) and node.module:
            names = [node.module]
        for name in names:
            if name.split(".")[0] in FRAMEWORK_MODULES:
                matches.append(f"{path.relative_to(REPO_ROOT)}:{node.lineno}: import {name}")
    return matches


@pytest.mark.unit
def test_no_os_environ_reads_outside_settings_module() -> None:
    """配置读取强约束: 禁止在 settings 之外读取环境变量."""
    allowlist = {Path("bulk_edit/settings.py")}

    matches: list[str] = []
    for path in PACKAGE_ROOT.rglob("*.py"):
        if path.relative_to(REPO_ROOT) in allowlist:
            continue
        matches.extend(_scan_lines(path, ENV_READ_PATTERN))

    assert not matches, "发现 settings 之外的环境变量读取:\n" + "\n".join(matches[:50])


@pytest.mark.unit
def test_repositories_do_not_commit_or_rollback_session() -> None:
    """Write boundary: repositories 层只 flush, 提交与回滚由路由边界处理."""
    matches: list[str] = []
    for path in (PACKAGE_ROOT / "repositories").rglob("*.py"):
        matches.extend(_session_write_calls(path))

    assert not matches, "Repositories 层发现 session 提交/回滚:\n" + "\n".join(matches[:50])


@pytest.mark.unit
def test_core_does_not_depend_on_web_or_orm_frameworks() -> None:
    """core 只依赖宿主协议, 不直接引用 Flask 或 SQLAlchemy."""
    matches: list[str] = []
    for path in (PACKAGE_ROOT / "core").rglob("*.py"):
        matches.extend(_framework_imports(path))

    assert not matches, "core 层发现框架依赖:\n" + "\n".join(matches[:50])
