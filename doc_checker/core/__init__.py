"""
Core Layer - 核心层

包含 Markdown 解析器和结构验证器。
"""

from doc_checker.core.parser import (
    parse_markdown,
    iter_blocks,
    render_document,
    build_toc,
    generate_header_id,
    format_block,
    Heading,
    CodeFence,
    Paragraph,
    ListItem,
    Block,
    TocEntry,
    Document,
)
from doc_checker.core.validator import (
    Validator,
    Issue,
    IssueKind,
    ValidationResult,
    check_text,
)

__all__ = [
    # parser
    "parse_markdown",
    "iter_blocks",
    "render_document",
    "build_toc",
    "generate_header_id",
    "format_block",
    "Heading",
    "CodeFence",
    "Paragraph",
    "ListItem",
    "Block",
    "TocEntry",
    "Document",
    # validator
    "Validator",
    "Issue",
    "IssueKind",
    "ValidationResult",
    "check_text",
]
