"""GovendorTool 测试: 命令格式与错误映射"""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from vendorfix.core.exceptions import FetchError, RemovalError, SyncError
from vendorfix.core.govendor import GovendorTool
from vendorfix.utils.shell import CommandResult


class TestGovendorCommands:
    def test_fetch_format(self, tmp_path: Path, executor) -> None:
        GovendorTool(tmp_path).fetch_at_branch("github.com/coldze/foo", "develop")
        assert executor.calls == [["govendor", "fetch", "github.com/coldze/foo@develop"]]
        assert executor.cwds == [str(tmp_path)]

    def test_custom_binary(self, tmp_path: Path, executor) -> None:
        GovendorTool(tmp_path, govendor_bin="/opt/go/bin/govendor").sync_all()
        assert executor.calls == [["/opt/go/bin/govendor", "sync"]]

    def test_remove_tree(self, tmp_path: Path, executor) -> None:
        target = tmp_path / "vendor" / "github.com" / "coldze" / "foo"
        GovendorTool(tmp_path).remove_tree(target)
        assert executor.calls == [["rm", "-rf", str(target)]]

    def test_sync(self, tmp_path: Path, executor) -> None:
        GovendorTool(tmp_path).sync_all()
        assert executor.syncs() == 1

    def test_explicit_executor_wins(self, tmp_path: Path, executor) -> None:
        calls: list[list[str]] = []

        class Local:
            def execute(self, cmd, *, cwd=".", timeout=None):
                calls.append(cmd)
                return CommandResult(0, "", "")

        GovendorTool(tmp_path, executor=Local()).sync_all()
        assert calls == [["govendor", "sync"]]
        assert executor.calls == []


class TestGovendorErrors:
    @pytest.mark.parametrize(("call", "error_cls"), [
        (lambda t, p: t.fetch_at_branch("a/b", "master"), FetchError),
        (lambda t, p: t.remove_tree(p / "vendor" / "a"), RemovalError),
        (lambda t, p: t.sync_all(), SyncError),
    ])
    def test_nonzero_exit(self, tmp_path: Path, executor, call, error_cls) -> None:
        executor.fail = lambda args: True
        with pytest.raises(error_cls) as exc_info:
            call(GovendorTool(tmp_path), tmp_path)
        assert exc_info.value.returncode == 1
        assert "boom" in str(exc_info.value)

    def test_missing_binary(self, tmp_path: Path) -> None:
        class Missing:
            def execute(self, cmd, *, cwd=".", timeout=None):
                raise FileNotFoundError(2, "No such file or directory", cmd[0])

        tool = GovendorTool(tmp_path, executor=Missing())
        with pytest.raises(FetchError, match="无法执行"):
            tool.fetch_at_branch("a/b", "master")

    def test_timeout(self, tmp_path: Path) -> None:
        class Slow:
            def execute(self, cmd, *, cwd=".", timeout=None):
                raise subprocess.TimeoutExpired(cmd, timeout)

        tool = GovendorTool(tmp_path, timeout=5, executor=Slow())
        with pytest.raises(SyncError, match="超时"):
            tool.sync_all()
