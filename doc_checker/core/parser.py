"""
Markdown 解析器模块 - 将参考文档解析为块序列

逐行扫描文档，识别 ATX 标题、围栏代码块、列表项和普通段落。
扫描器是一个三状态的状态机（NORMAL / IN_CODE_FENCE / AFTER_HEADING），
解析过程是纯函数：同一文本多次解析得到完全相同的结果。

页内链接（目录条目）使用 markdown-it-py 的行内解析提取，
以便正确跳过行内代码中的伪链接。
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Union
from urllib.parse import unquote

from markdown_it import MarkdownIt


HEADING_RE = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*))?$")
CLOSING_HASHES_RE = re.compile(r"(?:^|[ \t]+)#+[ \t]*$")
FENCE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})[ \t]*(.*)$")
LIST_ITEM_RE = re.compile(r"^([ \t]*)([-*+]|\d{1,9}[.)])(?:[ \t]+(.*))?$")
LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class Heading:
    """
    标题块

    Attributes:
        level: 标题级别 (1-6)
        text: 标题文本（已去除首尾空白和闭合的 #）
        slug: 由标题文本生成的锚点
        line_number: 在原文件中的行号
    """
    level: int
    text: str
    slug: str
    line_number: int = field(default=0, compare=False)


@dataclass(frozen=True)
class CodeFence:
    """
    围栏代码块

    Attributes:
        fence: 开启围栏的分隔符（如 ``` 或 ~~~~）
        info: 信息字符串（语言标记及其后的内容）
        lines: 代码块内容行
        line_number: 开启围栏所在行号
        closed: 是否在文件结束前被关闭
    """
    fence: str
    info: str
    lines: tuple[str, ...]
    line_number: int = field(default=0, compare=False)
    closed: bool = True

    @property
    def language(self) -> Optional[str]:
        """信息字符串的第一个单词，没有时返回 None"""
        parts = self.info.split()
        return parts[0] if parts else None


@dataclass(frozen=True)
class Paragraph:
    """连续的普通文本行"""
    lines: tuple[str, ...]
    line_number: int = field(default=0, compare=False)


@dataclass(frozen=True)
class ListItem:
    """
    列表项

    Attributes:
        marker: 列表标记（-、*、+、1.、1)）
        text: 列表项文本
        indent: 缩进宽度（制表符按 4 列展开）
        line_number: 在原文件中的行号
    """
    marker: str
    text: str
    indent: int = 0
    line_number: int = field(default=0, compare=False)


Block = Union[Heading, CodeFence, Paragraph, ListItem]


@dataclass(frozen=True)
class TocEntry:
    """
    目录条目：指向页内锚点的链接

    Attributes:
        text: 链接文本
        anchor: 目标锚点（已做 URL 解码，不含 #）
        line_number: 链接所在行号
    """
    text: str
    anchor: str
    line_number: int = field(default=0, compare=False)


@dataclass(frozen=True)
class Document:
    """解析后的文档：按文档顺序排列的块"""
    blocks: tuple[Block, ...] = ()

    @property
    def headings(self) -> list[Heading]:
        return [b for b in self.blocks if isinstance(b, Heading)]

    @property
    def code_fences(self) -> list[CodeFence]:
        return [b for b in self.blocks if isinstance(b, CodeFence)]

    @property
    def toc_entries(self) -> list[TocEntry]:
        """文档中所有页内锚点链接，按出现顺序"""
        entries: list[TocEntry] = []
        for block in self.blocks:
            if isinstance(block, ListItem):
                entries.extend(_extract_anchor_links(block.text, block.line_number))
            elif isinstance(block, Paragraph):
                # 整段一起解析，链接文本可以跨行
                entries.extend(
                    _extract_anchor_links("\n".join(block.lines), block.line_number)
                )
        return entries


class ScanState(Enum):
    """行扫描器状态"""
    NORMAL = "normal"
    IN_CODE_FENCE = "in_code_fence"
    AFTER_HEADING = "after_heading"


def generate_header_id(text: str) -> str:
    """
    生成 GitHub 风格的 Header ID

    规则：
    1. 转换为小写
    2. 移除标点（保留字母、数字、下划线、空白和连字符）
    3. 每个空白字符转换为一个连字符（与 GitHub 一致，不合并）

    Args:
        text: 标题文本

    Returns:
        锚点 slug，标题只包含标点时为空字符串
    """
    result = text.lower()
    result = re.sub(r"[^\w\s\-]", "", result)
    return re.sub(r"\s", "-", result)


def iter_blocks(text: str) -> Iterator[Block]:
    """
    惰性地将 Markdown 文本切分为块

    每次调用都从头扫描，因此可以重复迭代且结果一致。

    Args:
        text: Markdown 内容

    Yields:
        按文档顺序排列的 Heading / CodeFence / Paragraph / ListItem
    """
    state = ScanState.NORMAL
    paragraph: list[str] = []
    paragraph_start = 0

    # 当前打开的围栏
    fence = ""
    fence_info = ""
    fence_lines: list[str] = []
    fence_start = 0

    for line_number, raw_line in enumerate(LINE_BREAK_RE.split(text), start=1):
        line = raw_line.rstrip()

        if state is ScanState.IN_CODE_FENCE:
            if _closes_fence(line, fence):
                yield CodeFence(
                    fence=fence,
                    info=fence_info,
                    lines=tuple(fence_lines),
                    line_number=fence_start,
                )
                state = ScanState.NORMAL
            else:
                fence_lines.append(raw_line)
            continue

        fence_match = FENCE_RE.match(line)
        # 反引号围栏的信息字符串中不能再出现反引号
        if fence_match and not (
            fence_match.group(1)[0] == "`" and "`" in fence_match.group(2)
        ):
            if paragraph:
                yield Paragraph(tuple(paragraph), paragraph_start)
                paragraph = []
            fence = fence_match.group(1)
            fence_info = fence_match.group(2).strip()
            fence_lines = []
            fence_start = line_number
            state = ScanState.IN_CODE_FENCE
            continue

        heading_match = HEADING_RE.match(line)
        if heading_match:
            if paragraph:
                yield Paragraph(tuple(paragraph), paragraph_start)
                paragraph = []
            heading_text = CLOSING_HASHES_RE.sub("", heading_match.group(2) or "").strip()
            yield Heading(
                level=len(heading_match.group(1)),
                text=heading_text,
                slug=generate_header_id(heading_text),
                line_number=line_number,
            )
            state = ScanState.AFTER_HEADING
            continue

        if not line.strip():
            if paragraph:
                yield Paragraph(tuple(paragraph), paragraph_start)
                paragraph = []
            state = ScanState.NORMAL
            continue

        list_match = LIST_ITEM_RE.match(line)
        if list_match:
            if paragraph:
                yield Paragraph(tuple(paragraph), paragraph_start)
                paragraph = []
            yield ListItem(
                marker=list_match.group(2),
                text=(list_match.group(3) or "").strip(),
                indent=len(list_match.group(1).expandtabs(4)),
                line_number=line_number,
            )
            state = ScanState.NORMAL
            continue

        # 标题之后的文本总是开启新段落
        if not paragraph or state is ScanState.AFTER_HEADING:
            paragraph_start = line_number
        paragraph.append(line)
        state = ScanState.NORMAL

    if paragraph:
        yield Paragraph(tuple(paragraph), paragraph_start)

    if state is ScanState.IN_CODE_FENCE:
        yield CodeFence(
            fence=fence,
            info=fence_info,
            lines=tuple(fence_lines),
            line_number=fence_start,
            closed=False,
        )


def parse_markdown(content: str) -> Document:
    """
    解析 Markdown 内容

    Args:
        content: Markdown 内容

    Returns:
        Document 对象，空文本返回空文档
    """
    return Document(blocks=tuple(iter_blocks(content)))


def _closes_fence(line: str, fence: str) -> bool:
    """判断一行是否关闭当前围栏：同一字符、长度不短于开启分隔符"""
    stripped = line.strip()
    if len(line) - len(line.lstrip(" ")) > 3:
        return False
    return (
        len(stripped) >= len(fence)
        and set(stripped) == {fence[0]}
    )


_inline_md = MarkdownIt()


def _extract_anchor_links(text: str, line_number: int) -> list[TocEntry]:
    """
    提取文本中的页内锚点链接 [text](#anchor)

    行内 token 不带行号，按链接之前的换行 token 数推算所在行。

    Args:
        text: 一行或多行文本
        line_number: 文本第一行的行号
    """
    if "](#" not in text:
        return []

    entries: list[TocEntry] = []
    for token in _inline_md.parseInline(text):
        children = token.children or []
        breaks = 0
        for j, child in enumerate(children):
            if child.type in ("softbreak", "hardbreak"):
                breaks += 1
                continue
            if child.type != "link_open":
                continue
            href = child.attrGet("href") or ""
            if not href.startswith("#"):
                continue

            # 链接文本由 link_open 与 link_close 之间的 token 组成
            label_parts: list[str] = []
            for next_child in children[j + 1:]:
                if next_child.type == "link_close":
                    break
                if next_child.type in ("softbreak", "hardbreak"):
                    label_parts.append(" ")
                else:
                    label_parts.append(next_child.content or "")

            entries.append(TocEntry(
                text="".join(label_parts),
                anchor=unquote(href[1:]),
                line_number=line_number + breaks,
            ))
    return entries


def format_block(block: Block) -> str:
    """
    将单个块格式化为 Markdown 字符串

    Args:
        block: 任一块类型

    Returns:
        Markdown 文本（不含结尾换行）
    """
    if isinstance(block, Heading):
        prefix = "#" * block.level
        # 以 # 结尾的文本需要补一个闭合序列，否则重新解析时会被当作闭合序列去掉
        if CLOSING_HASHES_RE.search(block.text):
            return f"{prefix} {block.text} #"
        return f"{prefix} {block.text}".rstrip()
    if isinstance(block, CodeFence):
        opening = f"{block.fence}{block.info}"
        body = [opening, *block.lines]
        if block.closed:
            body.append(block.fence)
        return "\n".join(body)
    if isinstance(block, Paragraph):
        return "\n".join(block.lines)
    if isinstance(block, ListItem):
        return f"{' ' * block.indent}{block.marker} {block.text}".rstrip()
    raise TypeError(f"Unknown block type: {type(block).__name__}")


def render_document(doc: Document) -> str:
    """
    将文档重新序列化为 Markdown

    块之间以空行分隔。对没有验证问题的文档，
    parse_markdown(render_document(doc)) == doc。
    """
    if not doc.blocks:
        return ""
    return "\n\n".join(format_block(block) for block in doc.blocks) + "\n"


def format_toc_entry(heading: Heading, base_level: int = 1) -> str:
    """将标题格式化为目录列表项"""
    indent = "  " * max(heading.level - base_level, 0)
    return f"{indent}- [{heading.text}](#{heading.slug})"


def build_toc(doc: Document, max_level: int = 6) -> list[str]:
    """
    根据标题生成目录

    Args:
        doc: 解析后的文档
        max_level: 纳入目录的最大标题级别

    Returns:
        目录行列表，以最浅的标题级别为零缩进
    """
    headings = [h for h in doc.headings if h.level <= max_level and h.slug]
    if not headings:
        return []
    base_level = min(h.level for h in headings)
    return [format_toc_entry(h, base_level) for h in headings]
