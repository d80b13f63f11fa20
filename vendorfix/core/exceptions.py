"""统一异常体系

所有业务异常继承 VendorFixError。
CLI 层据此区分致命错误（退出码 1）与单包可恢复错误（仅记录日志）。
"""

from __future__ import annotations


class VendorFixError(Exception):
    """工具基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(VendorFixError):
    """命令行参数或配置文件缺失、内容无效"""

    code = "CONFIG_ERROR"


class ManifestReadError(VendorFixError):
    """vendor.json 无法读取（不存在、无权限等）"""

    code = "MANIFEST_READ_ERROR"


class ManifestParseError(VendorFixError):
    """vendor.json 内容不是合法 JSON 或结构不符"""

    code = "MANIFEST_PARSE_ERROR"


class ExecutionError(VendorFixError):
    """外部命令执行失败"""

    code = "EXECUTION_ERROR"

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class FetchError(ExecutionError):
    """单个分支的 govendor fetch 失败（可恢复）"""

    code = "FETCH_ERROR"


class RemovalError(ExecutionError):
    """旧的 vendor 副本删除失败（可恢复）"""

    code = "REMOVAL_ERROR"


class SyncError(ExecutionError):
    """govendor sync 失败（致命）"""

    code = "SYNC_ERROR"
