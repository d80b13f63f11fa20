"""vendorfix - govendor 依赖分支修复工具"""

__version__ = "0.1.0"
