"""
Escape-sequence aware string primitives.

Everything here measures text in terminal display columns: escape
sequences are zero-width, East Asian wide characters are two columns,
and non-printing characters take no space. Widths come from wcwidth.
"""

from __future__ import annotations

import re
from typing import Iterator

from wcwidth import wcwidth

__all__ = [
    "TRUNCATION_MARKER",
    "measure_width",
    "pad_to_width",
    "slice_by_display_width",
    "strip_sequences",
    "wrap_to_width",
]

TRUNCATION_MARKER = "…"

# CSI (colors, cursor), OSC (titles, hyperlinks), then any other two-byte escape
ESCAPE_RE = re.compile(
    r"\x1b\[[0-?]*[ -/]*[@-~]"
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"
    r"|\x1b[@-Z\\-_]"
)


def _tokens(text: str) -> Iterator[tuple[str, int]]:
    """Yield (chunk, columns): whole escape sequences with 0, or single characters."""
    pos = 0
    for match in ESCAPE_RE.finditer(text):
        for ch in text[pos:match.start()]:
            yield ch, max(wcwidth(ch), 0)
        yield match.group(0), 0
        pos = match.end()
    for ch in text[pos:]:
        yield ch, max(wcwidth(ch), 0)


def strip_sequences(text: str) -> str:
    """Remove all escape sequences from text."""
    return ESCAPE_RE.sub("", text)


def measure_width(text: str) -> int:
    """Number of terminal columns text occupies."""
    return sum(columns for _, columns in _tokens(text))


def slice_by_display_width(text: str, start: int, end: int) -> str:
    """
    Substring by display column rather than character index.

    Keeps the visible characters occupying columns [start, end). Every escape
    sequence is preserved, including those past the cut, so a style opened
    inside the span is still closed. A wide character that straddles either
    boundary is dropped.
    """
    if end <= start:
        return ""

    out: list[str] = []
    col = 0
    cut = False
    for chunk, columns in _tokens(text):
        if chunk.startswith("\x1b"):
            out.append(chunk)
            continue
        if cut:
            continue
        if columns == 0:
            # Combining marks only with a kept base
            if start < col <= end:
                out.append(chunk)
            continue
        if col + columns > end:
            cut = True
            continue
        if col >= start:
            out.append(chunk)
        col += columns
    return "".join(out)


def pad_to_width(text: str, width: int) -> str:
    """Clip or right-pad text with spaces to exactly width columns."""
    if width <= 0:
        return ""
    current = measure_width(text)
    if current > width:
        text = slice_by_display_width(text, 0, width)
        current = measure_width(text)
    return text + " " * (width - current)


def _truncate_token(word: str, width: int) -> str:
    """Cut an over-long word to width columns, the last being the marker."""
    return slice_by_display_width(word, 0, width - measure_width(TRUNCATION_MARKER)) + TRUNCATION_MARKER


def _wrap_line(line: str, width: int) -> list[str]:
    """Greedy word wrap of a single logical line."""
    rows: list[str] = []
    words: list[str] = []
    row_width = 0

    for word in line.split(" "):
        word_width = measure_width(word)
        if word_width > width:
            word = _truncate_token(word, width)
            word_width = measure_width(word)

        if words and row_width + 1 + word_width > width:
            if word_width == 0:
                # Escape-only word (e.g. a style reset) closes the row it follows
                words[-1] += word
            rows.append(" ".join(words).rstrip(" "))
            words = []
            row_width = 0
            if word_width == 0:
                continue

        if words:
            row_width += 1
        words.append(word)
        row_width += word_width

    if words or not rows:
        rows.append(" ".join(words).rstrip(" "))
    return rows


def wrap_to_width(text: str, width: int) -> str:
    """
    Reflow text so no line is wider than width columns.

    Existing line breaks are kept; each logical line is then wrapped at
    spaces. A single word wider than width is cut and ends in the
    truncation marker, the rest of that word is dropped. Escape sequences
    stay attached to the words they were embedded in, even when the
    visible text around them is cut.

    Returns:
        The wrapped text, lines joined with '\\n'
    """
    logical_lines = text.split("\n")
    if width < 1:
        return "\n".join("" for _ in logical_lines)

    wrapped: list[str] = []
    for line in logical_lines:
        wrapped.extend(_wrap_line(line, width))
    return "\n".join(wrapped)
