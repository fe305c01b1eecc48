"""Tests for message HTML rendering."""

from notechat.utils.markdown_renderer import (
    blocks_to_html,
    render_markdown,
    render_runs,
    strip_markdown,
)
from notechat.rendering.block_parser import parse_blocks
from notechat.rendering.inline_parser import TextRun


def test_render_runs_escapes_text() -> None:
    html = render_runs([TextRun.bold("a<b"), TextRun.plain(" & "), TextRun.code("<x>")])

    assert html == "<strong>a&lt;b</strong> &amp; <code>&lt;x&gt;</code>"


def test_blocks_to_html() -> None:
    html = blocks_to_html(parse_blocks("## Title\n- one\n- two\n\n1. first\n```\na < b\n```"))

    assert html == "\n".join([
        "<h2>Title</h2>",
        "<ul><li>one</li><li>two</li></ul>",
        "<br>",
        "<ol><li>first</li></ol>",
        "<pre><code>a &lt; b\n</code></pre>",
    ])


def test_assistant_text_is_parsed() -> None:
    html = render_markdown("Use *this* <tag>")

    assert "<p>Use <em>this</em> &lt;tag&gt;</p>" in html


def test_user_text_is_not_parsed() -> None:
    html = render_markdown("**not bold**\nnext", is_user=True)

    assert "<p>**not bold**<br>next</p>" in html
    assert "<strong>" not in html


def test_empty_text_renders_nothing() -> None:
    assert render_markdown("") == ""


def test_strip_markdown() -> None:
    text = "# Title\n- **a**\n```\ncode\n```\nplain `x`"

    assert strip_markdown(text) == "Title\na\ncode\nplain x"
