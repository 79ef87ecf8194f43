"""
CLI 入口模块 - 使用 Typer 构建命令行界面

检查流程：
1. 收集目标文件（目录按 .gitignore 过滤）
2. 解析每个文档
3. 执行验证
4. 生成报告并设置退出码
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from doc_checker.config import ALLOWED_LANGUAGES_ENV, CheckerConfig, ConfigError
from doc_checker.core import build_toc, check_text, parse_markdown, ValidationResult
from doc_checker.filters import MARKDOWN_SUFFIXES, find_markdown_files
from doc_checker.reporters import JsonReporter, Reporter, RichReporter

logger = logging.getLogger(__name__)

# 创建 Typer 应用实例
app = typer.Typer(
    name="doc-checker",
    help="doc-checker: Static structure linter for Markdown reference guides.",
    add_completion=False,
)

# Rich Console 用于输出；错误和警告走 stderr，不混入 JSON 报告
console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool) -> None:
    """配置日志：verbose 时输出 DEBUG 级别到 stderr"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def collect_files(targets: list[str]) -> list[Path]:
    """
    展开检查目标

    文件原样保留，目录展开为其中未被忽略的 Markdown 文件。

    Raises:
        FileNotFoundError: 目标路径不存在
    """
    files: list[Path] = []
    for target in targets:
        path = Path(target)
        if not path.exists():
            raise FileNotFoundError(target)
        if path.is_dir():
            files.extend(find_markdown_files(path))
        else:
            files.append(path)
    return files


def check_file(path: Path, config: CheckerConfig) -> ValidationResult:
    """读取并检查单个文件"""
    content = path.read_text(encoding="utf-8")
    logger.debug(f"Checking {path} ({len(content)} chars)")
    return check_text(content, str(path), config)


@app.command()
def check(
    targets: Optional[list[str]] = typer.Argument(
        None,
        help="Markdown files or directories to check (default: current directory)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show detailed output",
    ),
    format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (default) or json",
    ),
    allow_lang: Optional[list[str]] = typer.Option(
        None,
        "--allow-lang",
        "-l",
        envvar=ALLOWED_LANGUAGES_ENV,
        help="Allowed code block language (repeatable or comma separated)",
    ),
) -> None:
    """
    Check Markdown documents for duplicate anchors, broken in-page links
    and untagged or unknown code blocks.

    Examples:
        doc-checker check
        doc-checker check docs/postgres.md
        doc-checker check docs --format json
        doc-checker check -l bash -l sql -l python README.md
    """
    setup_logging(verbose)

    if format not in ("rich", "json"):
        raise typer.BadParameter(f"Unknown format: {format}", param_hint="--format")

    try:
        config = CheckerConfig.from_languages(allow_lang)
    except ConfigError as e:
        raise typer.BadParameter(str(e), param_hint="--allow-lang")

    logger.debug(f"Allowed languages: {', '.join(sorted(config.allowed_languages))}")

    target_list = targets or ["."]
    try:
        files = collect_files(target_list)
    except FileNotFoundError as e:
        err_console.print(f"[red]Error:[/red] Path does not exist: {e}")
        raise typer.Exit(1)

    if not files:
        err_console.print("[yellow]Warning:[/yellow] No Markdown files found")
        raise typer.Exit(0)

    results: list[ValidationResult] = []
    for path in files:
        try:
            results.append(check_file(path, config))
        except (OSError, UnicodeDecodeError) as e:
            err_console.print(f"[red]Error:[/red] Failed to read {path}: {e}")
            raise typer.Exit(1)

    reporter: Reporter
    if format == "json":
        reporter = JsonReporter()
    else:
        reporter = RichReporter(console)

    reporter.report(results, ", ".join(target_list))

    if any(result.issues for result in results):
        raise typer.Exit(1)
    raise typer.Exit(0)


@app.command()
def toc(
    file: Path = typer.Argument(..., help="Markdown file to build a table of contents for"),
    max_level: int = typer.Option(
        3,
        "--max-level",
        min=1,
        max=6,
        help="Deepest heading level to include",
    ),
) -> None:
    """Print a Markdown table of contents generated from a document's headings."""
    if file.suffix.lower() not in MARKDOWN_SUFFIXES:
        logger.warning(f"{file} does not look like a Markdown file")

    try:
        content = file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        err_console.print(f"[red]Error:[/red] Failed to read {file}: {e}")
        raise typer.Exit(1)

    for line in build_toc(parse_markdown(content), max_level=max_level):
        typer.echo(line)


@app.command()
def version() -> None:
    """Show the version of doc-checker."""
    from doc_checker import __version__
    console.print(f"[bold]doc-checker[/bold] v{__version__}")


if __name__ == "__main__":
    app()
