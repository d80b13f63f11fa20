"""vendorfix 命令行接口

用法:
    vendorfix -path /go/src/github.com/coldze/app -branch develop
    vendorfix -path . -rep github.com/acme --log-json
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from vendorfix import __version__
from vendorfix.core.branches import build_fallback_sequence
from vendorfix.core.config import DEFAULT_CONFIG_NAME, Config
from vendorfix.core.exceptions import ConfigError, SyncError, VendorFixError
from vendorfix.core.fixer import PackageFixer
from vendorfix.core.govendor import GovendorTool
from vendorfix.core.manifest import parse_manifest
from vendorfix.utils.logger import setup_logging

logger = logging.getLogger(__name__)


def _fail(msg: str, *args: object) -> NoReturn:
    logger.error(msg, *args)
    sys.exit(1)


def _load_config(root: Path, config_path: str | None) -> Config:
    path = Path(config_path) if config_path else root / DEFAULT_CONFIG_NAME
    if config_path and not path.exists():
        raise ConfigError(f"配置文件不存在: {path}")
    return Config.from_file(path)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-path", "--path", "path", default="", help="工作目录（完整路径）")
@click.option("-branch", "--branch", "branch", default=None, help="源分支 [默认: master]")
@click.option("-rep", "--rep", "repo", default=None,
              help="仓库前缀 [默认: github.com/coldze]")
@click.option("--config", "config_path", default=None,
              help=f"YAML 配置文件（默认 <path>/{DEFAULT_CONFIG_NAME}）")
@click.option("--log-level", default=None, envvar="VENDORFIX_LOG_LEVEL", help="日志级别")
@click.option("--log-json", is_flag=True, envvar="VENDORFIX_LOG_JSON",
              help="输出 JSON 格式日志")
@click.version_option(version=__version__)
def main(
    path: str, branch: str | None, repo: str | None,
    config_path: str | None, log_level: str | None, log_json: bool,
) -> None:
    """将指定仓库前缀的 vendor 包切换到回退分支并重新同步"""
    setup_logging(level=log_level or "INFO", json_output=log_json)

    if not path:
        _fail("未指定工作目录 (-path)")
    if branch is not None and not branch:
        _fail("未指定分支 (-branch)")

    root = Path(path).expanduser()
    if not root.is_dir():
        _fail("无法进入目录 '%s'", path)
    root = root.resolve()

    if repo is not None and not repo:
        _fail("未指定仓库前缀 (-rep)")

    try:
        cfg = _load_config(root, config_path)
    except ConfigError as e:
        _fail("加载配置失败: %s", e)
    if log_level is None:
        setup_logging(level=cfg.log_level, json_output=log_json)

    branch = branch or cfg.default_branch
    repo = repo or cfg.repo_filter

    try:
        manifest = parse_manifest(root, cfg.vendor_dir, cfg.manifest_name)
    except VendorFixError as e:
        _fail("解析 vendor 失败. 目录: %s. 错误: %s", root, e)

    tool = GovendorTool(root, govendor_bin=cfg.govendor_bin, timeout=cfg.command_timeout)
    fixer = PackageFixer(tool, root, vendor_dir=cfg.vendor_dir)
    report = fixer.process_manifest(manifest, repo, build_fallback_sequence(branch))

    try:
        fixer.sync_all()
    except SyncError as e:
        _fail("同步 vendor 失败: %s", e)

    logger.info("全部完成. 仓库: %s. 分支: %s. %s", repo, branch, report.summary())
