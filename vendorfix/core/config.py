"""集中配置管理

提供统一的配置入口，支持从 YAML 文件加载 + 命令行覆盖。
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml

from vendorfix.core.exceptions import ConfigError
from vendorfix.utils.file_io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "vendorfix.yml"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """工具全局配置"""

    # 默认命令行取值
    default_branch: str = "master"
    repo_filter: str = "github.com/coldze"

    # vendor 目录布局
    vendor_dir: str = "vendor"
    manifest_name: str = "vendor.json"

    # 外部命令
    govendor_bin: str = "govendor"
    command_timeout: int | None = None

    log_level: str = "INFO"

    # 放不到字段里的配置项
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str | Path) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        try:
            data = load_yaml(path)
        except (yaml.YAMLError, ValueError, OSError) as e:
            raise ConfigError(f"配置文件无效: {path} - {e}") from e
        if not data:
            return cls()
        known = {f for f in cls.__dataclass_fields__ if f != "extra"}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        cfg = cls(**matched)
        cfg.extra = extra
        cfg.validate()
        logger.info("配置已加载: %s", path)
        return cfg

    def validate(self) -> None:
        for name in ("default_branch", "repo_filter", "vendor_dir",
                     "manifest_name", "govendor_bin", "log_level"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ConfigError(f"配置项 {name} 必须为非空字符串")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(
                f"配置项 log_level 无效: {self.log_level} (可选: {', '.join(LOG_LEVELS)})"
            )
        if self.command_timeout is not None and (
            not isinstance(self.command_timeout, int)
            or isinstance(self.command_timeout, bool)
            or self.command_timeout <= 0
        ):
            raise ConfigError("配置项 command_timeout 必须为正整数")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
