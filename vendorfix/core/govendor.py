"""govendor 外部命令适配器

VendorTool 协议的生产实现:
- fetch:  govendor fetch <importPath>@<branch>
- remove: rm -rf <path>
- sync:   govendor sync
"""

from __future__ import annotations

import logging
from pathlib import Path

from vendorfix.core.exceptions import (
    ExecutionError,
    FetchError,
    RemovalError,
    SyncError,
)
from vendorfix.utils.shell import CommandExecutor, run_cmd

logger = logging.getLogger(__name__)


class GovendorTool:
    """通过子进程调用 govendor / rm 的外部操作实现

    所有命令均在 root_dir 下执行，不修改进程工作目录。
    """

    def __init__(
        self,
        root_dir: str | Path,
        *,
        govendor_bin: str = "govendor",
        timeout: int | None = None,
        executor: CommandExecutor | None = None,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.govendor_bin = govendor_bin
        self.timeout = timeout
        self.executor = executor

    def _run(self, args: list[str], label: str, error_cls: type[ExecutionError]) -> None:
        run_cmd(
            args, cwd=str(self.root_dir), timeout=self.timeout,
            label=label, error_cls=error_cls, executor=self.executor,
        )

    def fetch_at_branch(self, import_path: str, branch: str) -> None:
        self._run(
            [self.govendor_bin, "fetch", f"{import_path}@{branch}"],
            label="govendor fetch", error_cls=FetchError,
        )

    def remove_tree(self, path: Path) -> None:
        self._run(["rm", "-rf", str(path)], label="rm", error_cls=RemovalError)

    def sync_all(self) -> None:
        logger.info("执行 govendor sync: %s", self.root_dir)
        self._run([self.govendor_bin, "sync"], label="govendor sync", error_cls=SyncError)
