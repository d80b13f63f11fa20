"""CLI 系统测试 fixture"""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _clean_logging(restore_root_logging) -> None:
    """main() 会重新配置根日志器"""
