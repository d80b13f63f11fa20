"""文件读写: vendor.json 原子回写、YAML 配置读取"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any

import yaml

# 配置文件最大大小 (1MB)
MAX_YAML_SIZE = 1024 * 1024


def atomic_write(path: Path, content: str) -> None:
    """写入同目录临时文件后 os.replace 覆盖目标，中途失败不留下半截文件"""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", dir=path.parent,
        prefix=f".{path.name}.", suffix=".tmp", delete=False,
    )
    try:
        with tmp:
            tmp.write(content)
        os.replace(tmp.name, path)
    except Exception:
        Path(tmp.name).unlink(missing_ok=True)
        raise


def load_yaml(path: str | Path) -> dict[str, Any]:
    """读取 YAML 映射；文件不存在或为空返回 {}

    异常:
        yaml.YAMLError: 语法错误
        ValueError: 文件过大，或顶层不是映射
        OSError: 读取失败
    """
    p = Path(path)
    if not p.exists():
        return {}
    if p.stat().st_size > MAX_YAML_SIZE:
        raise ValueError(f"YAML 文件过大: {p} (上限 {MAX_YAML_SIZE} 字节)")

    data = yaml.safe_load(p.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{p} 顶层应为映射 (实际类型: {type(data).__name__})")
    return data
