"""Tests for the block parser."""

from notechat.rendering.block_parser import (
    Break,
    CodeBlock,
    Heading,
    ListItem,
    OrderedList,
    Paragraph,
    UnorderedList,
    parse_blocks,
)
from notechat.rendering.inline_parser import TextRun


def test_headings_by_level() -> None:
    blocks = parse_blocks("# One\n## Two\n### Three")

    assert blocks == [
        Heading(1, [TextRun.plain("One")]),
        Heading(2, [TextRun.plain("Two")]),
        Heading(3, [TextRun.plain("Three")]),
    ]


def test_four_hashes_is_a_paragraph() -> None:
    assert parse_blocks("#### Four") == [Paragraph([TextRun.plain("#### Four")])]


def test_hash_without_space_is_a_paragraph() -> None:
    assert parse_blocks("#tag") == [Paragraph([TextRun.plain("#tag")])]


def test_consecutive_items_group_into_lists() -> None:
    blocks = parse_blocks("- a\n* b\n1. one\n22. two\n- c")

    assert blocks == [
        UnorderedList([ListItem([TextRun.plain("a")]), ListItem([TextRun.plain("b")])]),
        OrderedList([ListItem([TextRun.plain("one")]), ListItem([TextRun.plain("two")])]),
        UnorderedList([ListItem([TextRun.plain("c")])]),
    ]


def test_blank_line_splits_lists() -> None:
    blocks = parse_blocks("- a\n\n- b")

    assert blocks == [
        UnorderedList([ListItem([TextRun.plain("a")])]),
        Break(),
        UnorderedList([ListItem([TextRun.plain("b")])]),
    ]


def test_list_markers_need_a_space() -> None:
    blocks = parse_blocks("-dash\n1.one")

    assert blocks == [
        Paragraph([TextRun.plain("-dash")]),
        Paragraph([TextRun.plain("1.one")]),
    ]


def test_list_items_are_parsed_inline() -> None:
    blocks = parse_blocks("- **bold** item")

    assert blocks == [
        UnorderedList([ListItem([TextRun.bold("bold"), TextRun.plain(" item")])])
    ]


def test_code_block_is_verbatim() -> None:
    blocks = parse_blocks("```python\nx = **1**\n\n# not a heading\n```\nafter")

    assert blocks == [
        CodeBlock("x = **1**\n\n# not a heading\n"),
        Paragraph([TextRun.plain("after")]),
    ]


def test_unterminated_fence_content_is_dropped() -> None:
    blocks = parse_blocks("before\n```\nlost code\nmore")

    assert blocks == [Paragraph([TextRun.plain("before")])]


def test_whitespace_line_is_a_break() -> None:
    blocks = parse_blocks("one\n   \ntwo")

    assert blocks == [
        Paragraph([TextRun.plain("one")]),
        Break(),
        Paragraph([TextRun.plain("two")]),
    ]


def test_each_line_is_its_own_paragraph() -> None:
    blocks = parse_blocks("first line\nsecond *line*")

    assert blocks == [
        Paragraph([TextRun.plain("first line")]),
        Paragraph([TextRun.plain("second "), TextRun.italic("line")]),
    ]


def test_three_items_make_one_list() -> None:
    blocks = parse_blocks("- a\n- b\n- c")

    assert len(blocks) == 1
    assert [item.runs for item in blocks[0].items] == [
        [TextRun.plain("a")],
        [TextRun.plain("b")],
        [TextRun.plain("c")],
    ]


def test_minimal_fence() -> None:
    assert parse_blocks("```\nx=1\n```") == [CodeBlock("x=1\n")]
