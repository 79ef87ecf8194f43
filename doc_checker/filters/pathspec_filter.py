"""Pathspec-based discovery of Markdown files.

This module uses the pathspec library for gitignore handling, supporting
negation patterns, double-star globs, and nested gitignore files, so that a
directory target only yields the documents a repository actually tracks.
"""

import logging
from pathlib import Path

import pathspec

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIXES: frozenset[str] = frozenset({".md", ".markdown"})

# Always applied on top of any .gitignore
DEFAULT_IGNORE_PATTERNS: list[str] = [
    ".git/",
    "node_modules/",
    "venv/",
    ".venv/",
    "__pycache__/",
    "dist/",
    "build/",
    "vendor/",
    ".tox/",
    ".pytest_cache/",
    ".mypy_cache/",
    "*.egg-info/",
]


class PathspecFilter:
    """File filter based on pathspec with nested gitignore support."""

    def __init__(self, root: Path, include_nested: bool = True):
        """
        Initialize the filter.

        Args:
            root: Directory the gitignore rules are relative to
            include_nested: Whether to include nested .gitignore files
        """
        self.root = root
        self._root_spec = pathspec.GitIgnoreSpec.from_lines(DEFAULT_IGNORE_PATTERNS)
        self._nested_specs: dict[Path, pathspec.GitIgnoreSpec] = {}
        self._include_nested = include_nested
        self._load_gitignore()
        if include_nested:
            self._load_nested_gitignores()

    def _read_spec(self, gitignore_path: Path) -> "pathspec.GitIgnoreSpec | None":
        try:
            lines = gitignore_path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping unreadable {gitignore_path}: {e}")
            return None
        return pathspec.GitIgnoreSpec.from_lines(lines)

    def _load_gitignore(self) -> None:
        """Load root .gitignore file on top of the default patterns."""
        gitignore_path = self.root / ".gitignore"
        if not gitignore_path.is_file():
            return

        spec = self._read_spec(gitignore_path)
        if spec is not None:
            self._root_spec = pathspec.GitIgnoreSpec(
                list(self._root_spec.patterns) + list(spec.patterns)
            )
            logger.debug(f"Loaded {len(spec.patterns)} patterns from {gitignore_path}")

    def _load_nested_gitignores(self) -> None:
        """Load nested .gitignore files from subdirectories."""
        for gitignore_path in self.root.rglob(".gitignore"):
            if gitignore_path.parent == self.root:
                continue
            if self._root_spec.match_file(self._relative(gitignore_path.parent) + "/"):
                continue

            spec = self._read_spec(gitignore_path)
            if spec is not None:
                self._nested_specs[gitignore_path.parent] = spec

    def _relative(self, path: Path) -> str:
        relative = path.relative_to(self.root) if path.is_absolute() else path
        return relative.as_posix()

    def should_ignore(self, path: Path) -> bool:
        """
        Check if a file should be ignored.

        A nested .gitignore applies to files in its directory and below and
        overrides shallower files, the root included. The deepest file with a
        pattern matching the path decides, so a deeper `!pattern` can
        re-include what a shallower file ignores.
        """
        try:
            relative_str = self._relative(path)
        except ValueError:
            return False

        if self._include_nested:
            for gitignore_dir in sorted(
                self._nested_specs, key=lambda p: len(p.parts), reverse=True
            ):
                try:
                    path_from_gitignore = path.relative_to(gitignore_dir)
                except ValueError:
                    continue
                result = self._nested_specs[gitignore_dir].check_file(
                    path_from_gitignore.as_posix()
                )
                if result.include is not None:
                    return result.include

        return bool(self._root_spec.match_file(relative_str))

    def filter_paths(self, paths: list[Path]) -> list[Path]:
        """Filter paths, returning those that should NOT be ignored."""
        return [p for p in paths if not self.should_ignore(p)]


def find_markdown_files(root: Path) -> list[Path]:
    """
    Collect Markdown documents under a directory.

    Args:
        root: Directory to walk

    Returns:
        Sorted list of non-ignored ``.md``/``.markdown`` files
    """
    root = root.resolve()
    path_filter = PathspecFilter(root)
    candidates = sorted(
        p for p in root.rglob("*")
        if p.is_file() and p.suffix.lower() in MARKDOWN_SUFFIXES
    )
    found = path_filter.filter_paths(candidates)
    logger.debug(f"Found {len(found)} Markdown files under {root}")
    return found
