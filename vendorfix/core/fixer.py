"""vendor 包修复器

职责:
- 按仓库前缀（大小写不敏感）筛选 manifest 条目
- 对命中的条目依次尝试回退分支执行 fetch
- fetch 成功后删除旧的 vendor 副本
- 全部条目处理完后触发一次 sync

单包失败只记录日志并写入报告，不向调用方抛出。
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from vendorfix.core.exceptions import FetchError, RemovalError
from vendorfix.core.models import (
    FixReport,
    Manifest,
    PackageOutcome,
    PackageRecord,
    PackageResult,
)
from vendorfix.core.protocols import VendorTool
from vendorfix.utils.logger import package_context

logger = logging.getLogger(__name__)


def matches_repo(record: PackageRecord, repo_filter: str) -> bool:
    """条目路径是否包含仓库前缀（大小写不敏感，空路径永不命中）"""
    if not record.path:
        return False
    return repo_filter.lower() in record.path.lower()


class PackageFixer:
    """vendor 包修复器"""

    def __init__(
        self,
        tool: VendorTool,
        root_dir: str | Path,
        vendor_dir: str = "vendor",
    ) -> None:
        self.tool = tool
        self.root_dir = Path(root_dir)
        self.vendor_dir = vendor_dir

    def fix_package(
        self, record: PackageRecord, branches: list[str], index: int | None = None,
    ) -> str | None:
        """按顺序尝试各分支，返回第一个 fetch 成功的分支；全部失败返回 None"""
        for branch in branches:
            ctx = package_context(index, record.path, branch)
            try:
                self.tool.fetch_at_branch(record.path, branch)
            except FetchError as e:
                logger.warning(
                    "切换 '%s' 到分支 '%s' 失败: %s", record.path, branch, e, extra=ctx,
                )
                continue
            logger.info("已切换 '%s' 到分支 '%s'", record.path, branch, extra=ctx)
            return branch
        return None

    def vendored_copy_path(self, record: PackageRecord) -> Path:
        """旧副本路径 <root>/<vendor_dir>/<path>

        规范化后必须位于 vendor 目录之内（"..", 或指向 vendor 根本身都会被拒绝），
        否则抛 RemovalError。
        """
        vendor_root = Path(os.path.normpath(self.root_dir / self.vendor_dir))
        target = Path(os.path.normpath(vendor_root / record.path.strip("/")))
        if vendor_root not in target.parents:
            raise RemovalError(f"拒绝删除 vendor 目录之外的路径: {record.path}")
        return target

    def remove_vendored_copy(self, record: PackageRecord) -> Path:
        """删除旧的 vendor 副本，失败抛 RemovalError"""
        target = self.vendored_copy_path(record)
        self.tool.remove_tree(target)
        return target

    def process_manifest(
        self,
        manifest: Manifest,
        repo_filter: str,
        branches: list[str],
    ) -> FixReport:
        """处理 manifest 中的全部条目，返回逐包结果"""
        report = FixReport(branches=list(branches))
        logger.info("共 %d 个包，回退分支: %s", len(manifest), " -> ".join(branches))

        for i, record in enumerate(manifest):
            if not matches_repo(record, repo_filter):
                logger.info(
                    "[%d] 无需处理: %s", i, record.path,
                    extra=package_context(i, record.path),
                )
                report.add(PackageResult(i, record.path, PackageOutcome.SKIPPED))
                continue
            report.add(self._process_record(i, record, branches))

        logger.info("处理完成: %s", report.summary())
        return report

    def _process_record(
        self, index: int, record: PackageRecord, branches: list[str],
    ) -> PackageResult:
        ctx = package_context(index, record.path)
        logger.info("[%d] 开始修复: %s", index, record.path, extra=ctx)
        branch = self.fix_package(record, branches, index=index)
        if branch is None:
            logger.error(
                "[%d] 修复失败，所有分支均不可用: %s", index, record.path, extra=ctx,
            )
            return PackageResult(
                index, record.path, PackageOutcome.FETCH_FAILED,
                error=f"所有分支 fetch 失败: {', '.join(branches)}",
            )
        ctx = package_context(index, record.path, branch)
        logger.info("[%d] 修复完成: %s@%s", index, record.path, branch, extra=ctx)

        try:
            target = self.remove_vendored_copy(record)
        except RemovalError as e:
            logger.error(
                "[%d] 删除旧副本失败: %s - %s", index, record.path, e, extra=ctx,
            )
            return PackageResult(
                index, record.path, PackageOutcome.REMOVAL_FAILED,
                branch=branch, error=str(e),
            )
        logger.info("[%d] 已删除旧副本: %s", index, target, extra=ctx)
        return PackageResult(index, record.path, PackageOutcome.FIXED, branch=branch)

    def sync_all(self) -> None:
        """全部条目处理完后同步 vendor 目录，失败抛 SyncError"""
        self.tool.sync_all()
