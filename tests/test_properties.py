"""Property-based tests for parsing and rendering.

Hypothesis generates both arbitrary text (parsing must be deterministic and
never raise) and well-formed guides assembled from block strategies (an
issue-free document must survive render and re-parse unchanged).
"""

from __future__ import annotations

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from doc_checker.core.parser import generate_header_id, parse_markdown, render_document
from doc_checker.core.validator import IssueKind, Validator

_WORD = st.text(alphabet="abcdefghijklmnopqrstuvwxyzABCDEFGHIJ", min_size=1, max_size=8)
_WORDS = st.lists(_WORD, min_size=1, max_size=5).map(" ".join)


@st.composite
def _heading(draw: st.DrawFn) -> str:
    level = draw(st.integers(min_value=1, max_value=6))
    return f"{'#' * level} {draw(_WORDS)}"


@st.composite
def _paragraph(draw: st.DrawFn) -> str:
    return "\n".join(draw(st.lists(_WORDS, min_size=1, max_size=3)))


@st.composite
def _list_item(draw: st.DrawFn) -> str:
    marker = draw(st.sampled_from(["-", "*", "+", "1.", "2)"]))
    indent = " " * draw(st.integers(min_value=0, max_value=4))
    return f"{indent}{marker} {draw(_WORDS)}"


@st.composite
def _code_fence(draw: st.DrawFn) -> str:
    fence = draw(st.sampled_from(["```", "~~~", "````"]))
    language = draw(st.sampled_from(["bash", "sql", "text", "SQL"]))
    body = draw(st.lists(st.one_of(_WORDS, st.just("")), max_size=4))
    return "\n".join([f"{fence}{language}", *body, fence])


_BLOCK = st.one_of(_heading(), _paragraph(), _list_item(), _code_fence())


@given(st.text())
def test_parse_is_deterministic(text: str) -> None:
    """Parsing the same text twice gives structurally equal documents."""
    assert parse_markdown(text) == parse_markdown(text)


@given(st.text())
def test_validate_never_raises(text: str) -> None:
    """Any text validates to a sorted list of issues."""
    issues = Validator().validate(parse_markdown(text))
    keys = [(i.line_number, i.kind.priority) for i in issues]
    assert keys == sorted(keys)


@settings(max_examples=200)
@given(st.lists(_BLOCK, max_size=12))
def test_clean_documents_round_trip(blocks: list[str]) -> None:
    """An issue-free document re-renders to text that parses back to it."""
    doc = parse_markdown("\n\n".join(blocks) + "\n")
    assume(not Validator().validate(doc))
    assert parse_markdown(render_document(doc)) == doc


@given(_WORDS, st.sampled_from(["!", "?", ".", ":", ")"]))
def test_colliding_headings_report_one_duplicate(words: str, punctuation: str) -> None:
    """Two different headings with equal slugs give exactly one issue."""
    first, second = words, f"{words.upper()}{punctuation}"
    assert first != second
    assert generate_header_id(first) == generate_header_id(second)
    text = f"## {first}\n\n## {second}\n"
    issues = Validator().validate(parse_markdown(text))
    assert [(i.kind, i.related_lines) for i in issues] == [
        (IssueKind.DUPLICATE_ANCHOR, (1, 3)),
    ]


@given(_WORDS)
def test_case_variants_collide(words: str) -> None:
    """Headings differing only in case share an anchor."""
    assume(words.lower() != words.upper())
    text = f"# {words.lower()}\n# {words.upper()}\n"
    issues = Validator().validate(parse_markdown(text))
    assert [i.kind for i in issues] == [IssueKind.DUPLICATE_ANCHOR]
