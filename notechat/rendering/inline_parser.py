"""Inline span parser for assistant message lines.

Turns one line of text into a flat sequence of styled runs. Only three
markers are understood: ``**bold**``, ``*italic*`` and ``` `code` ```.
Emphasis never nests and there are no escape rules; an unmatched marker
is kept as literal text.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple


class RunStyle(Enum):
    """Style of a text run."""

    PLAIN = "plain"
    BOLD = "bold"
    ITALIC = "italic"
    CODE = "code"


@dataclass(frozen=True)
class TextRun:
    """A contiguous span of text sharing one style."""

    style: RunStyle
    text: str

    @classmethod
    def plain(cls, text: str) -> "TextRun":
        return cls(RunStyle.PLAIN, text)

    @classmethod
    def bold(cls, text: str) -> "TextRun":
        return cls(RunStyle.BOLD, text)

    @classmethod
    def italic(cls, text: str) -> "TextRun":
        return cls(RunStyle.ITALIC, text)

    @classmethod
    def code(cls, text: str) -> "TextRun":
        return cls(RunStyle.CODE, text)


# Order matters: on a tie at the same index the earlier entry wins,
# so "**" is preferred over the "*" it starts with.
MARKERS: Tuple[Tuple[str, RunStyle], ...] = (
    ("**", RunStyle.BOLD),
    ("*", RunStyle.ITALIC),
    ("`", RunStyle.CODE),
)


def _next_marker(text: str, pos: int) -> Tuple[int, Optional[str], Optional[RunStyle]]:
    """Find the earliest marker at or after ``pos``.

    Args:
        text: Line being scanned
        pos: Current scan position

    Returns:
        Tuple of (start index, marker, style). When no marker remains the
        start index is ``len(text)`` and marker/style are None.
    """
    best_index = len(text)
    best_marker: Optional[str] = None
    best_style: Optional[RunStyle] = None

    for marker, style in MARKERS:
        index = text.find(marker, pos)
        if index != -1 and index < best_index:
            best_index = index
            best_marker = marker
            best_style = style

    return best_index, best_marker, best_style


def _append_plain(runs: List[TextRun], text: str) -> None:
    """Append plain text, merging with a preceding plain run."""
    if not text:
        return
    if runs and runs[-1].style is RunStyle.PLAIN:
        runs[-1] = TextRun.plain(runs[-1].text + text)
    else:
        runs.append(TextRun.plain(text))


def parse_inline(text: str) -> List[TextRun]:
    """Parse one line into styled runs.

    Single left-to-right pass. At each position the nearest marker is
    chosen; text before it becomes plain. If the marker has a matching
    close later in the line the enclosed text becomes one styled run,
    otherwise the marker itself is emitted as plain text and scanning
    continues right after it.

    Args:
        text: One line of raw text

    Returns:
        List of TextRun objects (empty for an empty line)
    """
    runs: List[TextRun] = []
    pos = 0
    length = len(text)

    while pos < length:
        start, marker, style = _next_marker(text, pos)

        if start > pos:
            _append_plain(runs, text[pos:start])

        if marker is None:
            break

        content_start = start + len(marker)
        end = text.find(marker, content_start)
        if end == -1:
            # Unterminated marker is literal text
            _append_plain(runs, marker)
            pos = content_start
        else:
            runs.append(TextRun(style, text[content_start:end]))
            pos = end + len(marker)

    return runs


def runs_to_text(runs: List[TextRun]) -> str:
    """Concatenate run texts, dropping the markers.

    Args:
        runs: Runs produced by :func:`parse_inline`

    Returns:
        The visible text of the line
    """
    return "".join(run.text for run in runs)
