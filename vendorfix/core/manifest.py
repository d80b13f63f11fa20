"""vendor.json 读写

职责:
- 从 <root>/vendor/vendor.json 加载依赖条目（保持文件顺序）
- 回写 manifest（保留未识别的顶层字段）
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from vendorfix.core.exceptions import ManifestParseError, ManifestReadError
from vendorfix.core.models import Manifest, PackageRecord
from vendorfix.utils.file_io import atomic_write

logger = logging.getLogger(__name__)

DEFAULT_VENDOR_DIR = "vendor"
DEFAULT_MANIFEST_NAME = "vendor.json"


def manifest_path(
    root_dir: str | Path,
    vendor_dir: str = DEFAULT_VENDOR_DIR,
    manifest_name: str = DEFAULT_MANIFEST_NAME,
) -> Path:
    return Path(root_dir) / vendor_dir / manifest_name


def parse_manifest(
    root_dir: str | Path,
    vendor_dir: str = DEFAULT_VENDOR_DIR,
    manifest_name: str = DEFAULT_MANIFEST_NAME,
) -> Manifest:
    """读取并解析 vendor.json

    要么返回完整的 Manifest，要么抛出异常，不返回部分结果。

    异常:
        ManifestReadError: 文件不存在或无法读取
        ManifestParseError: 内容不是合法 JSON，或 package 段结构不符
    """
    path = manifest_path(root_dir, vendor_dir, manifest_name)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestReadError(f"无法读取 {path}: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestParseError(f"{path} 不是合法 JSON: {e}") from e

    if not isinstance(data, dict):
        raise ManifestParseError(
            f"{path} 顶层应为对象 (实际类型: {type(data).__name__})"
        )

    entries = data.get("package")
    if entries is None:
        entries = []
    if not isinstance(entries, list):
        raise ManifestParseError(f"{path} 的 package 字段应为数组")

    packages: list[PackageRecord] = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ManifestParseError(f"{path} 第 {i} 个 package 条目应为对象")
        try:
            packages.append(PackageRecord.from_dict(entry))
        except ValueError as e:
            raise ManifestParseError(f"{path} 第 {i} 个 package 条目: {e}") from e

    extra = {k: v for k, v in data.items() if k != "package"}
    logger.info("已加载 %d 个 vendor 包: %s", len(packages), path)
    return Manifest(packages=packages, extra=extra)


def save_manifest(
    manifest: Manifest,
    root_dir: str | Path,
    vendor_dir: str = DEFAULT_VENDOR_DIR,
    manifest_name: str = DEFAULT_MANIFEST_NAME,
) -> Path:
    """原子写回 vendor.json（制表符缩进，与 govendor 输出一致）"""
    path = manifest_path(root_dir, vendor_dir, manifest_name)
    content = json.dumps(manifest.to_dict(), indent="\t") + "\n"
    atomic_write(path, content)
    logger.info("manifest 已保存: %s", path)
    return path
