"""通用工具: 日志、子进程执行、文件读写"""
