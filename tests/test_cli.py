"""CLI tests driven through typer's CliRunner."""

from __future__ import annotations

import json
import typing as typ

import pytest
from typer.testing import CliRunner

from doc_checker import __version__
from doc_checker.cli import app

if typ.TYPE_CHECKING:
    from pathlib import Path

runner = CliRunner()


@pytest.fixture()
def guide_file(tmp_path: Path, postgres_guide: str) -> Path:
    path = tmp_path / "guide.md"
    path.write_text(postgres_guide, encoding="utf-8")
    return path


def test_check_clean_file_exits_zero(guide_file: Path) -> None:
    """No issues means exit code 0."""
    result = runner.invoke(app, ["check", str(guide_file)])
    assert result.exit_code == 0, result.output
    assert "全部通过" in result.output


def test_check_reports_issues_and_exits_one(tmp_path: Path) -> None:
    """Any issue makes the command fail."""
    path = tmp_path / "bad.md"
    path.write_text("- [Foo](#bar)\n", encoding="utf-8")
    result = runner.invoke(app, ["check", str(path)])
    assert result.exit_code == 1
    assert "BROKEN_LINK" in result.output


def test_check_json_output(tmp_path: Path) -> None:
    """--format json prints a machine readable report."""
    path = tmp_path / "open.md"
    path.write_text("```sql\nSELECT 1;\n", encoding="utf-8")
    result = runner.invoke(app, ["check", str(path), "--format", "json"])
    assert result.exit_code == 1
    data = json.loads(result.stdout)
    kinds = [i["kind"] for i in data["files"][0]["issues"]]
    assert kinds == ["UNTERMINATED_FENCE"]


def test_check_directory(tmp_path: Path, guide_file: Path) -> None:
    """Directories are expanded into their Markdown files."""
    (tmp_path / "other.md").write_text("```\nx\n```\n", encoding="utf-8")
    result = runner.invoke(app, ["check", str(tmp_path), "-f", "json"])
    assert result.exit_code == 1
    data = json.loads(result.stdout)
    assert data["summary"]["files_checked"] == 2
    assert data["summary"]["total_issues"] == 1


def test_allow_lang_option(tmp_path: Path) -> None:
    """--allow-lang replaces the default language set."""
    path = tmp_path / "py.md"
    path.write_text("```python\nprint(1)\n```\n", encoding="utf-8")
    assert runner.invoke(app, ["check", str(path)]).exit_code == 1
    result = runner.invoke(app, ["check", str(path), "-l", "python"])
    assert result.exit_code == 0, result.output


def test_allowed_languages_from_environment(tmp_path: Path) -> None:
    """The environment variable configures the allowed set."""
    path = tmp_path / "json.md"
    path.write_text("```json\n{}\n```\n", encoding="utf-8")
    result = runner.invoke(
        app,
        ["check", str(path)],
        env={"DOC_CHECKER_ALLOWED_LANGUAGES": "json,bash"},
    )
    assert result.exit_code == 0, result.output


def test_missing_path_exits_one(tmp_path: Path) -> None:
    """A non-existent target is an error."""
    result = runner.invoke(app, ["check", str(tmp_path / "nope.md")])
    assert result.exit_code == 1
    assert "Path does not exist" in result.output


def test_unknown_format_is_usage_error(guide_file: Path) -> None:
    """Only rich and json formats are accepted."""
    result = runner.invoke(app, ["check", str(guide_file), "--format", "xml"])
    assert result.exit_code == 2


def test_empty_directory_exits_zero(tmp_path: Path) -> None:
    """Nothing to check is not a failure."""
    result = runner.invoke(app, ["check", str(tmp_path)])
    assert result.exit_code == 0
    assert "No Markdown files found" in result.output


def test_toc_command(tmp_path: Path) -> None:
    """toc prints one list line per heading."""
    path = tmp_path / "toc.md"
    path.write_text("# Guide\n## Backup & Restore\n### pg_dump\n", encoding="utf-8")
    result = runner.invoke(app, ["toc", str(path), "--max-level", "2"])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        "- [Guide](#guide)",
        "  - [Backup & Restore](#backup--restore)",
    ]


def test_version_command() -> None:
    """version prints the package version."""
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_json_errors_go_to_stderr(tmp_path: Path) -> None:
    """Error lines never mix into the JSON stream on stdout."""
    result = runner.invoke(app, ["check", str(tmp_path / "nope.md"), "-f", "json"])
    assert result.exit_code == 1
    assert result.stdout == ""
    assert "Path does not exist" in result.stderr


def test_empty_directory_warning_goes_to_stderr(tmp_path: Path) -> None:
    """The no-files warning is written to stderr."""
    result = runner.invoke(app, ["check", str(tmp_path), "--format", "json"])
    assert result.exit_code == 0
    assert "No Markdown files found" in result.stderr
    assert "No Markdown files found" not in result.stdout
