"""Line-oriented block parser for assistant responses.

Supports a deliberately small markdown subset:
- Fenced code blocks (```)
- Headers (# ## ###)
- Unordered lists (- item or * item) and ordered lists (1. item)
- Blank lines (rendered as breaks)
- Everything else is a paragraph

Tables, blockquotes, links and images are not recognized.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Union

from .inline_parser import TextRun, parse_inline


FENCE_MARKER = "```"

# Longest prefix first
HEADING_PREFIXES = (("### ", 3), ("## ", 2), ("# ", 1))
UNORDERED_PREFIXES = ("- ", "* ")
ORDERED_ITEM_RE = re.compile(r"^\d+\.\s")


@dataclass
class Heading:
    """Heading of level 1 to 3."""

    level: int
    runs: List[TextRun]


@dataclass
class ListItem:
    """One item of a list container."""

    runs: List[TextRun]


@dataclass
class UnorderedList:
    """Bulleted list built from consecutive ``-``/``*`` lines."""

    items: List[ListItem] = field(default_factory=list)


@dataclass
class OrderedList:
    """Numbered list built from consecutive ``1.`` lines."""

    items: List[ListItem] = field(default_factory=list)


@dataclass
class Paragraph:
    """A single non-blank line of text."""

    runs: List[TextRun]


@dataclass
class CodeBlock:
    """Verbatim content of a fenced code block, one newline per line."""

    code: str


@dataclass
class Break:
    """Blank line."""


Block = Union[Heading, UnorderedList, OrderedList, Paragraph, CodeBlock, Break]


def _append_list_item(blocks: List[Block], kind: type, runs: List[TextRun]) -> None:
    """Extend the last produced list if it is of the same kind.

    Args:
        blocks: Blocks produced so far
        kind: UnorderedList or OrderedList
        runs: Runs of the new item
    """
    last = blocks[-1] if blocks else None
    if isinstance(last, kind):
        last.items.append(ListItem(runs))
    else:
        blocks.append(kind(items=[ListItem(runs)]))


def parse_blocks(text: str) -> List[Block]:
    """Parse a response body into block elements.

    One forward pass over the lines. The only carried state is whether a
    code fence is open and the lines collected inside it. A fence still
    open at end of input is discarded along with its content.

    Args:
        text: Full response text

    Returns:
        Ordered list of blocks
    """
    blocks: List[Block] = []
    in_code_block = False
    code_lines: List[str] = []

    for line in text.split("\n"):
        # Code fences
        if line.startswith(FENCE_MARKER):
            if in_code_block:
                blocks.append(CodeBlock("".join(code_lines)))
                in_code_block = False
            else:
                in_code_block = True
            code_lines = []
            continue

        if in_code_block:
            code_lines.append(line + "\n")
            continue

        # Empty line
        if not line.strip():
            blocks.append(Break())
            continue

        # Headers
        heading = _match_heading(line)
        if heading is not None:
            blocks.append(heading)
            continue

        # Unordered lists
        if line.startswith(UNORDERED_PREFIXES):
            _append_list_item(blocks, UnorderedList, parse_inline(line[2:]))
            continue

        # Ordered lists
        ordered_match = ORDERED_ITEM_RE.match(line)
        if ordered_match:
            _append_list_item(
                blocks, OrderedList, parse_inline(line[ordered_match.end():])
            )
            continue

        # Regular paragraph
        blocks.append(Paragraph(parse_inline(line)))

    return blocks


def _match_heading(line: str) -> Optional[Heading]:
    """Return a Heading if the line starts with a heading prefix."""
    for prefix, level in HEADING_PREFIXES:
        if line.startswith(prefix):
            return Heading(level=level, runs=parse_inline(line[len(prefix):]))
    return None
