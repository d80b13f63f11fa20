"""vendorfix 核心模块

拆分说明:
- models.py: 数据模型
- manifest.py: vendor.json 读写
- branches.py: 分支回退序列
- fixer.py: 匹配、修复、删除、同步
- govendor.py: govendor 外部命令适配器
"""

from vendorfix.core.branches import build_fallback_sequence
from vendorfix.core.fixer import PackageFixer, matches_repo
from vendorfix.core.govendor import GovendorTool
from vendorfix.core.manifest import parse_manifest, save_manifest
from vendorfix.core.models import (
    FixReport,
    Manifest,
    PackageOutcome,
    PackageRecord,
    PackageResult,
)

__all__ = [
    "build_fallback_sequence",
    "PackageFixer",
    "matches_repo",
    "GovendorTool",
    "parse_manifest",
    "save_manifest",
    "FixReport",
    "Manifest",
    "PackageOutcome",
    "PackageRecord",
    "PackageResult",
]
