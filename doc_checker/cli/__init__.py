"""
CLI Layer - 命令行接口层

提供命令行入口。
"""

from doc_checker.cli.app import app, check, toc, version

__all__ = [
    "app",
    "check",
    "toc",
    "version",
]
