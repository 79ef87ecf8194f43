"""
Rich 终端报告器 - 使用 Rich 库输出彩色终端格式

按文件列出问题，最后给出按问题类型汇总的表格和结论面板。
"""

from collections import Counter

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from doc_checker.core.validator import Issue, IssueKind, ValidationResult


# 问题类型的展示信息：(图标, 标签)
KIND_LABELS: dict[IssueKind, tuple[str, str]] = {
    IssueKind.DUPLICATE_ANCHOR: ("🔁", "重复锚点"),
    IssueKind.BROKEN_LINK: ("🔗", "失效链接"),
    IssueKind.UNTAGGED_CODE_BLOCK: ("🏷️", "缺少语言标记"),
    IssueKind.UNKNOWN_LANGUAGE: ("❓", "未知语言"),
    IssueKind.UNTERMINATED_FENCE: ("🚧", "未闭合代码块"),
}

# 每个文件最多显示的问题数
MAX_ISSUES_PER_FILE = 20


class RichReporter:
    """Rich 终端报告器"""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def report(self, results: list[ValidationResult], target: str) -> None:
        """生成 Rich 格式报告"""
        self.console.print()
        self.console.print("─" * 80, style="dim")
        self.console.print(
            "📋 doc-checker 文档结构检查报告 📋",
            style="bold cyan",
            justify="center",
        )
        self.console.print("─" * 80, style="dim")

        for result in results:
            if result.issues:
                self._print_file_issues(result)

        all_issues = [issue for result in results for issue in result.issues]
        if all_issues:
            self._print_summary(all_issues)

        self._print_conclusion(results, target)

    def _print_file_issues(self, result: ValidationResult) -> None:
        """打印单个文件的问题"""
        self.console.print()
        self.console.print(f"[bold]◆ {escape(result.path)}[/bold]")
        self.console.print()

        for issue in result.issues[:MAX_ISSUES_PER_FILE]:
            icon, _ = KIND_LABELS[issue.kind]
            self.console.print(
                f"  [red]{icon} {escape(issue.message)}[/red] "
                f"[dim]{escape(result.path)}:{issue.line_number} ({issue.code})[/dim]"
            )
            if issue.suggestion:
                self.console.print(f"     [dim]→ {escape(issue.suggestion)}[/dim]")

        hidden = len(result.issues) - MAX_ISSUES_PER_FILE
        if hidden > 0:
            self.console.print(f"  [dim]... 还有 {hidden} 个问题未显示[/dim]")

    def _print_summary(self, issues: list[Issue]) -> None:
        """打印按问题类型汇总的表格"""
        self.console.print()
        self.console.print("[bold]◆ 问题汇总[/bold]")
        self.console.print()

        counts = Counter(issue.kind for issue in issues)

        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("检查项", style="cyan", width=24)
        table.add_column("代码", width=22)
        table.add_column("数量", justify="right", width=8)

        for kind in IssueKind:
            icon, label = KIND_LABELS[kind]
            count = counts.get(kind, 0)
            count_text = f"[red]{count}[/red]" if count else "[green]0[/green]"
            table.add_row(f"{icon} {label}", kind.value, count_text)

        self.console.print(table)

    def _print_conclusion(self, results: list[ValidationResult], target: str) -> None:
        """打印总结"""
        total = sum(len(r.issues) for r in results)
        failed_files = sum(1 for r in results if not r.passed)

        self.console.print()
        if total == 0:
            self.console.print(Panel(
                f"[bold green]✅ 全部通过[/bold green]\n"
                f"[dim]检查了 {len(results)} 个文件，没有发现问题[/dim]\n\n"
                f"[dim]目标: {escape(target)}[/dim]",
                border_style="green",
            ))
        else:
            self.console.print(Panel(
                f"[bold red]❌ 检查未通过[/bold red]\n"
                f"在 {failed_files}/{len(results)} 个文件中发现 [red]{total}[/red] 个问题\n\n"
                f"[dim]目标: {escape(target)}[/dim]",
                border_style="red",
            ))
        self.console.print()
