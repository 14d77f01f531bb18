"""Inline span patterns: bold, italic, code and strikethrough."""

from __future__ import annotations

import re
from dataclasses import replace
from typing import TYPE_CHECKING

from richmark.document import Run, StyledDocument, TextAttributes
from richmark.styles import StyleKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from richmark.styles import StyleRegistry, TextStyle

# Applied in this order; each pass sees the text left by the previous one.
STYLE_PATTERNS: tuple[tuple[re.Pattern[str], StyleKind], ...] = (
    (re.compile(r"\*\*(.+?)\*\*"), StyleKind.BOLD),
    (re.compile(r"\*(.+?)\*"), StyleKind.ITALIC),
    (re.compile(r"_(.+?)_"), StyleKind.ITALIC),
    (re.compile(r"`(.+?)`"), StyleKind.CODE),
)
STRIKETHROUGH_PATTERN = re.compile(r"~~(.+?)~~")


def apply_inline(runs: Iterable[Run], registry: StyleRegistry) -> list[Run]:
    """Replace delimited spans in a line's runs with styled runs.

    Each pattern swaps the whole span to its style's font, color and
    background. Strikethrough runs last and resets the span to body text
    with the strikethrough flag set. Unclosed delimiters stay as literal text.
    """
    line = StyledDocument(runs)
    for pattern, kind in STYLE_PATTERNS:
        _swap_matches(line, pattern, registry[kind])
    _swap_matches(line, STRIKETHROUGH_PATTERN, registry.body, strikethrough=True)
    return list(line.runs)


def _swap_matches(
    line: StyledDocument,
    pattern: re.Pattern[str],
    style: TextStyle,
    *,
    strikethrough: bool = False,
) -> None:
    matches = list(pattern.finditer(line.text))
    # Back to front so earlier offsets stay valid.
    for match in reversed(matches):
        paragraph = line.attributes_at(match.start()).paragraph
        attributes = TextAttributes.from_style(style, paragraph)
        if strikethrough:
            attributes = replace(attributes, strikethrough=True)
        line.replace(match.start(), match.end(), match.group(1), attributes)
