"""
核心验证器模块 - 检查参考文档的结构一致性

执行以下验证：
1. 锚点唯一性：两个标题不能生成相同的 slug
2. 目录链接：页内锚点链接必须指向存在的标题
3. 代码块语言：必须有语言标记，且在允许的集合内
4. 围栏闭合：文件结束前必须关闭所有代码围栏

验证是纯函数，收集全部问题而不是在第一个问题处停止。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from doc_checker.config import CheckerConfig
from doc_checker.core.parser import Document, Heading, parse_markdown


class IssueKind(Enum):
    """
    问题类型

    定义顺序即同一行上多个问题的排序优先级。
    """
    DUPLICATE_ANCHOR = "DUPLICATE_ANCHOR"
    BROKEN_LINK = "BROKEN_LINK"
    UNTAGGED_CODE_BLOCK = "UNTAGGED_CODE_BLOCK"
    UNKNOWN_LANGUAGE = "UNKNOWN_LANGUAGE"
    UNTERMINATED_FENCE = "UNTERMINATED_FENCE"

    @property
    def priority(self) -> int:
        return list(IssueKind).index(self)


@dataclass(frozen=True)
class Issue:
    """
    检查问题

    Attributes:
        kind: 问题类型
        line_number: 行号
        message: 问题描述
        suggestion: 修复建议
        related_lines: 相关的其他行（如重复锚点的首次出现位置）
    """
    kind: IssueKind
    line_number: int
    message: str
    suggestion: Optional[str] = None
    related_lines: tuple[int, ...] = ()

    @property
    def code(self) -> str:
        return self.kind.value


@dataclass
class ValidationResult:
    """
    单个文件的验证结果

    Attributes:
        path: 文件路径
        issues: 发现的问题列表（文档顺序）
        stats: 统计信息
    """
    path: str
    issues: list[Issue] = field(default_factory=list)
    stats: dict[str, int] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return not self.issues


class Validator:
    """验证器"""

    def __init__(self, config: Optional[CheckerConfig] = None):
        self.config = config or CheckerConfig()

    def validate_anchors(self, doc: Document) -> tuple[dict[str, Heading], list[Issue]]:
        """
        建立 slug -> 标题 的映射并检测重复锚点

        slug 为空的标题（只含标点）无法被链接，不参与映射。

        Returns:
            (锚点映射, 问题列表)
        """
        anchors: dict[str, Heading] = {}
        issues: list[Issue] = []

        for heading in doc.headings:
            if not heading.slug:
                continue
            first = anchors.get(heading.slug)
            if first is None:
                anchors[heading.slug] = heading
                continue
            issues.append(Issue(
                kind=IssueKind.DUPLICATE_ANCHOR,
                line_number=heading.line_number,
                message=(
                    f"Heading '{heading.text}' produces anchor '#{heading.slug}' "
                    f"already used by '{first.text}' at line {first.line_number}"
                ),
                suggestion="Rename one of the headings so their anchors differ",
                related_lines=(first.line_number, heading.line_number),
            ))

        return anchors, issues

    def validate_links(self, doc: Document, anchors: dict[str, Heading]) -> list[Issue]:
        """检查每个页内锚点链接是否指向存在的标题"""
        issues: list[Issue] = []

        for entry in doc.toc_entries:
            if entry.anchor in anchors:
                continue
            issues.append(Issue(
                kind=IssueKind.BROKEN_LINK,
                line_number=entry.line_number,
                message=f"Link '{entry.text}' points to missing anchor '#{entry.anchor}'",
                suggestion=_suggest_anchor(entry.anchor, anchors),
            ))

        return issues

    def validate_code_blocks(self, doc: Document) -> list[Issue]:
        """
        验证代码块

        检查：
        1. 代码块是否有语言标记
        2. 语言标记是否在允许的集合内（不区分大小写）
        3. 代码围栏是否被关闭
        """
        issues: list[Issue] = []
        allowed = ", ".join(sorted(self.config.allowed_languages))

        for block in doc.code_fences:
            language = block.language
            if not language:
                issues.append(Issue(
                    kind=IssueKind.UNTAGGED_CODE_BLOCK,
                    line_number=block.line_number,
                    message="Code block missing language identifier",
                    suggestion=f"Add a language tag, one of: {allowed}",
                ))
            elif not self.config.is_allowed(language):
                issues.append(Issue(
                    kind=IssueKind.UNKNOWN_LANGUAGE,
                    line_number=block.line_number,
                    message=f"Code block language '{language}' is not allowed",
                    suggestion=f"Use one of: {allowed}",
                ))

            if not block.closed:
                issues.append(Issue(
                    kind=IssueKind.UNTERMINATED_FENCE,
                    line_number=block.line_number,
                    message=f"Code fence '{block.fence}' is never closed",
                    suggestion=f"Add a closing '{block.fence}' line",
                ))

        return issues

    def validate(self, doc: Document) -> list[Issue]:
        """
        执行所有验证

        Args:
            doc: 解析后的文档

        Returns:
            按行号排序的问题列表，同一行按问题类型优先级排序
        """
        anchors, issues = self.validate_anchors(doc)
        issues.extend(self.validate_links(doc, anchors))
        issues.extend(self.validate_code_blocks(doc))
        return sorted(issues, key=lambda i: (i.line_number, i.kind.priority))


def check_text(
    content: str,
    path: str = "<string>",
    config: Optional[CheckerConfig] = None,
) -> ValidationResult:
    """
    解析并验证一段 Markdown 文本

    Args:
        content: Markdown 内容
        path: 用于报告的文件路径
        config: 检查器配置

    Returns:
        验证结果
    """
    doc = parse_markdown(content)
    issues = Validator(config).validate(doc)

    result = ValidationResult(path=path, issues=issues)
    result.stats["headings"] = len(doc.headings)
    result.stats["code_blocks"] = len(doc.code_fences)
    result.stats["toc_entries"] = len(doc.toc_entries)
    result.stats["total_issues"] = len(issues)
    return result


def _suggest_anchor(anchor: str, anchors: dict[str, Heading]) -> Optional[str]:
    """为失效锚点找一个相近的候选"""
    lowered = anchor.lower()
    if lowered in anchors:
        return f"Anchors are case-sensitive, did you mean '#{lowered}'?"
    candidates = [slug for slug in anchors if lowered in slug or slug in lowered]
    if candidates:
        return f"Did you mean '#{candidates[0]}'?"
    if anchors:
        return f"Available anchors: {', '.join(list(anchors)[:5])}"
    return None
