"""File discovery for doc-checker.

This module provides pathspec-based gitignore filtering used when a
directory is passed as a check target.
"""

from doc_checker.filters.pathspec_filter import (
    PathspecFilter,
    DEFAULT_IGNORE_PATTERNS,
    MARKDOWN_SUFFIXES,
    find_markdown_files,
)

__all__ = [
    "PathspecFilter",
    "DEFAULT_IGNORE_PATTERNS",
    "MARKDOWN_SUFFIXES",
    "find_markdown_files",
]
