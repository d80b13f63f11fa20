"""领域协议定义

抽象 govendor 相关的外部操作，使匹配/回退逻辑不依赖真实子进程。
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class VendorTool(Protocol):
    """vendor 外部操作协议

    三个操作失败时分别抛出 FetchError / RemovalError / SyncError。
    """

    def fetch_at_branch(self, import_path: str, branch: str) -> None:
        """将 import_path 对应的包拉取到指定分支"""
        ...

    def remove_tree(self, path: Path) -> None:
        """递归强制删除目录"""
        ...

    def sync_all(self) -> None:
        """按 vendor.json 同步整个 vendor 目录"""
        ...
