"""测试共享 fixture: 录制式命令执行器 + 假 vendor 工具

外部命令（govendor / rm）全部由内存实现替代，测试无需安装 govendor。
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from vendorfix.core.exceptions import FetchError, RemovalError, SyncError
from vendorfix.utils.shell import CommandResult, LocalExecutor, set_executor


class RecordingExecutor:
    """记录每次调用的命令执行器，fail(args) 为真时返回 rc=1"""

    def __init__(self, fail: Callable[[list[str]], bool] | None = None) -> None:
        self.calls: list[list[str]] = []
        self.cwds: list[str] = []
        self.fail = fail or (lambda args: False)

    def execute(self, cmd, *, cwd=".", timeout=None) -> CommandResult:
        args = list(cmd)
        self.calls.append(args)
        self.cwds.append(cwd)
        if self.fail(args):
            return CommandResult(returncode=1, stdout="", stderr="boom")
        return CommandResult(returncode=0, stdout="", stderr="")

    def fetches(self) -> list[str]:
        """返回 govendor fetch 的 <path>@<branch> 参数列表"""
        return [c[2] for c in self.calls if c[1:2] == ["fetch"]]

    def removals(self) -> list[str]:
        return [c[2] for c in self.calls if c[0] == "rm"]

    def syncs(self) -> int:
        return sum(1 for c in self.calls if c[1:2] == ["sync"])


class FakeVendorTool:
    """VendorTool 的内存实现

    fetch_ok(path, branch) 决定 fetch 是否成功；remove_ok / sync_ok 控制其余操作。
    """

    def __init__(
        self,
        fetch_ok: Callable[[str, str], bool] | None = None,
        remove_ok: bool = True,
        sync_ok: bool = True,
    ) -> None:
        self.fetch_ok = fetch_ok or (lambda path, branch: True)
        self.remove_ok = remove_ok
        self.sync_ok = sync_ok
        self.fetches: list[tuple[str, str]] = []
        self.removed: list[Path] = []
        self.sync_count = 0

    def fetch_at_branch(self, import_path: str, branch: str) -> None:
        self.fetches.append((import_path, branch))
        if not self.fetch_ok(import_path, branch):
            raise FetchError(f"fetch {import_path}@{branch} 失败", returncode=1)

    def remove_tree(self, path: Path) -> None:
        if not self.remove_ok:
            raise RemovalError(f"rm {path} 失败", returncode=1)
        self.removed.append(path)

    def sync_all(self) -> None:
        self.sync_count += 1
        if not self.sync_ok:
            raise SyncError("sync 失败", returncode=1)


@pytest.fixture()
def executor() -> Iterator[RecordingExecutor]:
    """替换全局命令执行器，测试结束后恢复"""
    rec = RecordingExecutor()
    set_executor(rec)
    yield rec
    set_executor(LocalExecutor())


@pytest.fixture()
def write_manifest(tmp_path: Path) -> Callable[..., Path]:
    """在 tmp_path/vendor/vendor.json 写入给定路径的条目"""

    def _write(*paths: str, extra: dict | None = None) -> Path:
        data = dict(extra or {})
        data["package"] = [{"path": p, "revision": f"rev-{i}"} for i, p in enumerate(paths)]
        target = tmp_path / "vendor" / "vendor.json"
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(data), encoding="utf-8")
        return target

    return _write


@pytest.fixture()
def make_tool() -> type[FakeVendorTool]:
    return FakeVendorTool


@pytest.fixture()
def restore_root_logging() -> Iterator[None]:
    """setup_logging 会替换根日志器的 handler，测试后恢复原状"""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in saved_handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in saved_handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(saved_level)
