"""Markdown <-> styled document conversion.

Markdown to document classifies each line's block marker, then applies the
inline patterns. Document to markdown reads markers back from run attributes
alone: font size and weight for headings, a background on proportional text
for quotes, and traits for inline spans.
"""

from __future__ import annotations

import math

from richmark.blocks import classify
from richmark.document import Run, StyledDocument, TextAttributes
from richmark.inline import apply_inline
from richmark.styles import Font, ParagraphStyle, StyleRegistry

QUOTE_MARKER = "> "

# (min size, max size, bold required, marker). Sized for the default registry.
HEADING_THRESHOLDS: tuple[tuple[float, float, bool, str], ...] = (
    (28, math.inf, False, "# "),
    (24, 28, False, "## "),
    (20, 24, False, "### "),
    (18, 20, True, "#### "),
    (16, 18, True, "##### "),
    (14, 16, True, "###### "),
)


def render(markdown: str, registry: StyleRegistry | None = None) -> StyledDocument:
    """Convert markdown source into a styled document."""
    if registry is None:
        registry = StyleRegistry()
    document = StyledDocument()
    lines = markdown.split("\n")
    last = len(lines) - 1
    for index, line in enumerate(lines):
        document.extend(_render_line(line, registry, newline=index < last))
    return document


def _render_line(line: str, registry: StyleRegistry, *, newline: bool) -> list[Run]:
    content, _kind, style = classify(line, registry)
    paragraph = ParagraphStyle(
        spacing_before=style.padding_top,
        spacing_after=style.padding_bottom,
        line_spacing=registry.line_spacing,
    )
    text = content + "\n" if newline else content
    return apply_inline([Run(text, TextAttributes.from_style(style, paragraph))], registry)


def serialize(document: StyledDocument) -> str:
    """Convert a styled document back into markdown."""
    parts: list[str] = []
    offset = 0
    for line in document.text.split("\n"):
        parts.append(_line_to_markdown(document, offset, line))
        offset += len(line) + 1
    return "\n".join(parts)


def heading_marker(font: Font) -> str | None:
    """Heading marker implied by a font's size and weight, if any."""
    for low, high, bold_required, marker in HEADING_THRESHOLDS:
        if low <= font.size < high and (font.bold or not bold_required):
            return marker
    return None


def is_heading_scale(font: Font) -> bool:
    """Whether a run is large enough to be heading text rather than an inline span."""
    return (font.size >= 18 and font.bold) or font.size >= 20  # noqa: PLR2004


def _is_quote(attributes: TextAttributes) -> bool:
    return attributes.background is not None and not attributes.font.monospace


def _line_to_markdown(document: StyledDocument, start: int, line: str) -> str:
    if not line:
        return line

    # Headings are atomic: no inline markers inside them.
    marker = heading_marker(document.attributes_at(start).font)
    if marker is not None:
        return marker + line

    runs = document.slice(start, start + len(line))
    prefix = QUOTE_MARKER if any(_is_quote(run.attributes) for run in runs) else ""
    return prefix + "".join(_run_to_markdown(run) for run in runs)


def _run_to_markdown(run: Run) -> str:
    text = _wrap_font_markers(run.attributes.font, run.text)
    if run.attributes.strikethrough:
        text = f"~~{text}~~"
    return text


def _wrap_font_markers(font: Font, text: str) -> str:
    if is_heading_scale(font):
        return text
    if font.monospace:
        return f"`{text}`"
    if font.bold:
        text = f"**{text}**"
    if font.italic:
        text = f"*{text}*"
    return text


# Names used by the converter's callers for each direction.
to_document = render
to_markdown = serialize
