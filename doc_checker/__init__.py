"""
doc-checker: 结构化 Markdown 参考文档的静态检查工具
"""

__version__ = "0.1.0"
