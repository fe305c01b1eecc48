"""Markdown to HTML renderer for chat messages.

Assistant text is parsed by the block and inline parsers and emitted as
HTML for Qt's rich text engine. User text is shown verbatim.
"""

import html
from typing import Dict, List

from ..config.themes import theme, fonts, metrics
from ..rendering.block_parser import (
    Block,
    Break,
    CodeBlock,
    Heading,
    OrderedList,
    Paragraph,
    UnorderedList,
    parse_blocks,
)
from ..rendering.inline_parser import RunStyle, TextRun, runs_to_text


_RUN_TAGS: Dict[RunStyle, str] = {
    RunStyle.BOLD: "strong",
    RunStyle.ITALIC: "em",
    RunStyle.CODE: "code",
}

_HEADING_SIZES = {1: "1.4em", 2: "1.25em", 3: "1.1em"}


def get_markdown_css(is_user: bool = False) -> str:
    """Build the stylesheet embedded in every rendered message.

    Args:
        is_user: User messages sit on the accent color and get light text

    Returns:
        CSS string
    """
    color = theme.text_on_accent if is_user else theme.text_primary
    code_fill = "rgba(0, 0, 0, 0.25)" if is_user else theme.code_bg

    rules = [
        f"body {{ color: {color}; font-family: {fonts.chat};"
        f" font-size: {metrics.font_medium}px; line-height: 1.5; }}",
        "p { margin: 8px 0; }",
        "ul, ol { margin: 4px 0 8px 0; }",
        "li { margin: 2px 0; }",
        f"code {{ font-family: {fonts.mono}; background-color: {code_fill}; }}",
        f"pre {{ font-family: {fonts.mono}; background-color: {code_fill};"
        f" border: 1px solid {theme.code_border}; padding: 12px; margin: 8px 0; }}",
    ]
    for level, size in _HEADING_SIZES.items():
        rules.append(
            f"h{level} {{ font-family: {fonts.ui}; font-size: {size};"
            f" font-weight: 600; margin: 10px 0 6px 0; }}"
        )
    return "\n".join(rules)


def render_runs(runs: List[TextRun]) -> str:
    """Render inline runs to HTML.

    Args:
        runs: Runs from the inline parser

    Returns:
        HTML fragment
    """
    parts = []
    for run in runs:
        text = html.escape(run.text, quote=False)
        tag = _RUN_TAGS.get(run.style)
        parts.append(f"<{tag}>{text}</{tag}>" if tag else text)
    return "".join(parts)


def blocks_to_html(blocks: List[Block]) -> str:
    """Render a block sequence to an HTML body fragment.

    Args:
        blocks: Blocks from the block parser

    Returns:
        HTML string
    """
    html_lines = []

    for block in blocks:
        if isinstance(block, CodeBlock):
            escaped = html.escape(block.code, quote=False)
            html_lines.append(f"<pre><code>{escaped}</code></pre>")
        elif isinstance(block, Heading):
            level = block.level
            html_lines.append(f"<h{level}>{render_runs(block.runs)}</h{level}>")
        elif isinstance(block, (UnorderedList, OrderedList)):
            tag = "ul" if isinstance(block, UnorderedList) else "ol"
            items = "".join(
                f"<li>{render_runs(item.runs)}</li>" for item in block.items
            )
            html_lines.append(f"<{tag}>{items}</{tag}>")
        elif isinstance(block, Paragraph):
            html_lines.append(f"<p>{render_runs(block.runs)}</p>")
        elif isinstance(block, Break):
            html_lines.append("<br>")

    return "\n".join(html_lines)


def render_markdown(text: str, is_user: bool = False) -> str:
    """Convert message text to a styled HTML document.

    Args:
        text: Message text (markdown for assistant messages)
        is_user: Whether this is a user message; user text is not parsed

    Returns:
        HTML document string, "" for empty text
    """
    if not text:
        return ""

    if is_user:
        body = "<p>{}</p>".format(html.escape(text, quote=False).replace("\n", "<br>"))
    else:
        body = blocks_to_html(parse_blocks(text))

    return (
        "<html><head><style>"
        f"{get_markdown_css(is_user)}"
        f"</style></head><body>{body}</body></html>"
    )


def strip_markdown(text: str) -> str:
    """Remove markdown formatting from text.

    Uses the same parsers as rendering, so the result is exactly the text
    a reader sees. Breaks become empty lines.

    Args:
        text: Markdown formatted text

    Returns:
        Plain text without markdown syntax
    """
    lines = []
    for block in parse_blocks(text):
        if isinstance(block, CodeBlock):
            lines.append(block.code.rstrip("\n"))
        elif isinstance(block, (UnorderedList, OrderedList)):
            lines.extend(runs_to_text(item.runs) for item in block.items)
        elif isinstance(block, (Heading, Paragraph)):
            lines.append(runs_to_text(block.runs))
        else:
            lines.append("")
    return "\n".join(lines).strip()
