"""外部命令执行

govendor / rm 都经由 CommandExecutor 执行；测试通过 set_executor 注入录制实现，
不需要真实的 govendor。
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass, field
from typing import Protocol

from vendorfix.core.exceptions import ExecutionError

logger = logging.getLogger(__name__)

# 错误信息中保留的 stderr 尾部长度
STDERR_TAIL = 500


@dataclass
class CommandResult:
    """一次外部命令的退出码与输出"""

    returncode: int
    stdout: str = ""
    stderr: str = ""
    args: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.returncode == 0

    def stderr_tail(self) -> str:
        """stderr 末尾部分（govendor 的有效报错通常在最后几行）"""
        return self.stderr.strip()[-STDERR_TAIL:]


class CommandExecutor(Protocol):
    """外部命令执行器

    非零退出码通过 CommandResult 返回；无法启动抛 OSError，超时抛 TimeoutExpired。
    """

    def execute(
        self, args: list[str], *, cwd: str = ".", timeout: int | None = None,
    ) -> CommandResult:
        ...


class LocalExecutor:
    """在本机以子进程运行命令（不经过 shell）"""

    def execute(
        self, args: list[str], *, cwd: str = ".", timeout: int | None = None,
    ) -> CommandResult:
        proc = subprocess.run(
            args, cwd=cwd, timeout=timeout,
            capture_output=True, text=True, check=False,
        )
        return CommandResult(proc.returncode, proc.stdout, proc.stderr, list(args))


_executor: CommandExecutor = LocalExecutor()


def get_executor() -> CommandExecutor:
    return _executor


def set_executor(executor: CommandExecutor) -> None:
    """替换进程级默认执行器"""
    global _executor  # noqa: PLW0603
    _executor = executor


def run_cmd(
    args: list[str],
    *,
    cwd: str = ".",
    timeout: int | None = None,
    label: str = "cmd",
    error_cls: type[ExecutionError] = ExecutionError,
    executor: CommandExecutor | None = None,
) -> CommandResult:
    """执行外部命令；非零退出、超时或无法启动时统一抛 error_cls

    Args:
        args: 命令及参数
        cwd: 工作目录（vendor 根目录）
        timeout: 超时秒数，None 表示不限
        label: 错误信息前缀，如 "govendor fetch"
        error_cls: FetchError / RemovalError / SyncError 等
        executor: 不传则使用 get_executor()
    """
    command = shlex.join(args)
    logger.debug("%s: %s (cwd=%s)", label, command, cwd)
    try:
        result = (executor or get_executor()).execute(args, cwd=cwd, timeout=timeout)
    except subprocess.TimeoutExpired as e:
        raise error_cls(f"{label}超时 ({timeout}s): {command}") from e
    except OSError as e:
        raise error_cls(f"{label}无法执行: {command} ({e})") from e

    if not result.success:
        raise error_cls(
            f"{label}失败 (rc={result.returncode}): {result.stderr_tail()}",
            returncode=result.returncode,
        )
    return result
