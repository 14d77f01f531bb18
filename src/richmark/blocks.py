"""Block-level line classification: headings and quotes."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from richmark.styles import StyleKind

if TYPE_CHECKING:
    from richmark.styles import StyleRegistry, TextStyle

# Longest prefix first, so "## " is never mistaken for "# ".
BLOCK_PREFIXES: tuple[tuple[str, StyleKind], ...] = (
    ("###### ", StyleKind.H6),
    ("##### ", StyleKind.H5),
    ("#### ", StyleKind.H4),
    ("### ", StyleKind.H3),
    ("## ", StyleKind.H2),
    ("# ", StyleKind.H1),
    ("> ", StyleKind.QUOTE),
)


class LineClass(NamedTuple):
    """A line with its block marker stripped, and the block style it selects."""

    content: str
    kind: StyleKind
    style: TextStyle


def classify(line: str, registry: StyleRegistry) -> LineClass:
    """Match ``line`` against the block markers at its start."""
    for prefix, kind in BLOCK_PREFIXES:
        if line.startswith(prefix):
            return LineClass(line[len(prefix) :], kind, registry[kind])
    return LineClass(line, StyleKind.BODY, registry[StyleKind.BODY])
