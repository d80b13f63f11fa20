"""vendorfix 数据模型

数据类:
- PackageRecord: vendor.json 中的单个依赖条目
- Manifest: vendor.json 整体（保持文件顺序）
- PackageResult / FixReport: 单包处理结果与汇总报告
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# JSON 字段名 -> PackageRecord 属性名
_FIELD_MAP = {
    "checksumSHA1": "checksum",
    "path": "path",
    "revision": "revision",
    "revisionTime": "revision_time",
    "version": "version",
    "versionExact": "version_exact",
}

# 序列化时必定输出的字段，其余为空则省略
_REQUIRED_FIELDS = ("path", "revision")


@dataclass(frozen=True)
class PackageRecord:
    """单个 vendor 依赖包条目（运行期间不可变）"""

    path: str
    revision: str = ""
    checksum: str = ""
    revision_time: str = ""
    version: str = ""
    version_exact: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PackageRecord:
        """从 vendor.json 条目构建，未识别字段忽略，缺失或 null 字段置空

        异常:
            ValueError: 已识别字段的值不是字符串
        """
        kwargs = {}
        for json_key, attr in _FIELD_MAP.items():
            value = data.get(json_key)
            if value is None:
                value = ""
            elif not isinstance(value, str):
                raise ValueError(
                    f"字段 {json_key} 应为字符串 (实际类型: {type(value).__name__})"
                )
            kwargs[attr] = value
        return cls(**kwargs)

    def to_dict(self) -> dict[str, str]:
        """转换为 vendor.json 条目格式"""
        data: dict[str, str] = {}
        for json_key, attr in _FIELD_MAP.items():
            value = getattr(self, attr)
            if value or json_key in _REQUIRED_FIELDS:
                data[json_key] = value
        return data


@dataclass
class Manifest:
    """vendor.json 内容

    extra 保存 package 以外的顶层字段（如 comment、ignore、rootPath），
    仅用于回写，不参与匹配。
    """

    packages: list[PackageRecord] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.packages)

    def __iter__(self) -> Iterator[PackageRecord]:
        return iter(self.packages)

    def to_dict(self) -> dict[str, Any]:
        data = dict(self.extra)
        data["package"] = [p.to_dict() for p in self.packages]
        return data


class PackageOutcome(str, Enum):
    """单包处理结果"""

    SKIPPED = "skipped"
    FIXED = "fixed"
    FETCH_FAILED = "fetch_failed"
    REMOVAL_FAILED = "removal_failed"


@dataclass
class PackageResult:
    """单个条目的处理记录"""

    index: int
    path: str
    outcome: PackageOutcome
    branch: str = ""
    error: str = ""


@dataclass
class FixReport:
    """一次运行的处理汇总（按 manifest 顺序）"""

    branches: list[str] = field(default_factory=list)
    results: list[PackageResult] = field(default_factory=list)

    def add(self, result: PackageResult) -> None:
        self.results.append(result)

    def by_outcome(self, outcome: PackageOutcome) -> list[PackageResult]:
        return [r for r in self.results if r.outcome == outcome]

    @property
    def matched(self) -> list[PackageResult]:
        """命中仓库前缀的条目（即进入 fix 流程的条目）"""
        return [r for r in self.results if r.outcome != PackageOutcome.SKIPPED]

    @property
    def fixed(self) -> list[PackageResult]:
        return self.by_outcome(PackageOutcome.FIXED)

    @property
    def failed(self) -> list[PackageResult]:
        return [
            r for r in self.results
            if r.outcome in (PackageOutcome.FETCH_FAILED, PackageOutcome.REMOVAL_FAILED)
        ]

    def summary(self) -> str:
        counts = {o: len(self.by_outcome(o)) for o in PackageOutcome}
        return (
            f"共 {len(self.results)} 个包: "
            f"修复 {counts[PackageOutcome.FIXED]}, "
            f"跳过 {counts[PackageOutcome.SKIPPED]}, "
            f"拉取失败 {counts[PackageOutcome.FETCH_FAILED]}, "
            f"删除失败 {counts[PackageOutcome.REMOVAL_FAILED]}"
        )
