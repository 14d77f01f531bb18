"""Render a styled document as Rich text for terminal display."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.style import Style
from rich.text import Text

from richmark.convert import is_heading_scale

if TYPE_CHECKING:
    from richmark.document import StyledDocument, TextAttributes


def attributes_to_style(attributes: TextAttributes) -> Style:
    """Map run attributes to a Rich style.

    A terminal has a single point size, so heading-scale text is underlined.
    """
    font = attributes.font
    return Style(
        color=None if attributes.color == "default" else attributes.color,
        bgcolor=attributes.background,
        bold=font.bold,
        italic=font.italic,
        strike=attributes.strikethrough,
        underline=is_heading_scale(font),
    )


def to_rich_text(document: StyledDocument) -> Text:
    """Build a Rich ``Text`` with one styled span per run."""
    text = Text()
    for run in document:
        text.append(run.text, style=attributes_to_style(run.attributes))
    return text
