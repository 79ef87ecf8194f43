"""Unit tests for CheckerConfig construction."""

from __future__ import annotations

import pytest

from doc_checker.config import DEFAULT_ALLOWED_LANGUAGES, CheckerConfig, ConfigError


def test_default_languages() -> None:
    """Without input the default bash/sql/text set is used."""
    assert CheckerConfig().allowed_languages == frozenset({"bash", "sql", "text"})
    assert CheckerConfig.from_languages(None).allowed_languages == DEFAULT_ALLOWED_LANGUAGES
    assert CheckerConfig.from_languages([]).allowed_languages == DEFAULT_ALLOWED_LANGUAGES


def test_languages_are_split_and_normalized() -> None:
    """Comma separated values are split, stripped and lowercased."""
    config = CheckerConfig.from_languages(["Bash, SQL", "json"])
    assert config.allowed_languages == frozenset({"bash", "sql", "json"})


def test_empty_language_list_is_rejected() -> None:
    """Values that contain no language are a configuration error."""
    with pytest.raises(ConfigError):
        CheckerConfig.from_languages([" , "])


def test_is_allowed_ignores_case() -> None:
    """Membership checks are case-insensitive."""
    config = CheckerConfig()
    assert config.is_allowed("SQL")
    assert not config.is_allowed("python")
