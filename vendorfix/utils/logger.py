"""vendorfix 日志配置

文本格式面向终端；JSON 格式面向 CI，逐包日志额外带 index / path / branch 字段，
便于按包聚合拉取、删除结果。
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from typing import Any

# LogRecord 上的属性名 -> JSON 输出键
_PACKAGE_FIELDS = {
    "pkg_index": "index",
    "pkg_path": "path",
    "pkg_branch": "branch",
}

TEXT_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"


def package_context(
    index: int | None, path: str, branch: str | None = None,
) -> dict[str, Any]:
    """构造逐包日志的 extra 参数

    示例:
        >>> logger.info("已切换", extra=package_context(0, "github.com/coldze/a", "stage"))
    """
    ctx: dict[str, Any] = {"pkg_path": path}
    if index is not None:
        ctx["pkg_index"] = index
    if branch is not None:
        ctx["pkg_branch"] = branch
    return ctx


class JSONFormatter(logging.Formatter):
    """单行 JSON 日志

    输出示例:
        {"ts": "2024-01-01T12:00:00+08:00", "level": "INFO",
         "logger": "vendorfix.core.fixer", "msg": "...",
         "index": 0, "path": "github.com/coldze/a", "branch": "stage"}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created).astimezone().isoformat(
                timespec="seconds",
            ),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for attr, key in _PACKAGE_FIELDS.items():
            value = getattr(record, attr, None)
            if value is not None:
                entry[key] = value
        if record.exc_info:
            entry["error"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(level: str = "INFO", json_output: bool = False) -> None:
    """配置根日志器，输出到 stderr；重复调用会替换之前的 handler"""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if json_output else logging.Formatter(TEXT_FORMAT))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[handler],
        force=True,
    )
