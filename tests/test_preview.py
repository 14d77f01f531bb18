"""Tests for preview.py: Rich rendering of styled runs."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from rich.color import Color
from rich.style import Style

from richmark.convert import render
from richmark.preview import attributes_to_style, to_rich_text
from richmark.styles import StyleKind

if TYPE_CHECKING:
    from collections.abc import Callable

    from richmark.document import TextAttributes

    Attrs = Callable[[StyleKind], TextAttributes]


def test_body_style_is_plain(style_attrs: Attrs) -> None:
    """Body text uses the terminal's default color and no decorations."""
    style = attributes_to_style(style_attrs(StyleKind.BODY))
    assert style.color is None
    assert style.bgcolor is None
    assert not style.bold
    assert not style.underline


def test_inline_traits(style_attrs: Attrs) -> None:
    """Bold, italic and strikethrough map onto the matching Rich flags."""
    assert attributes_to_style(style_attrs(StyleKind.BOLD)).bold
    assert attributes_to_style(style_attrs(StyleKind.ITALIC)).italic
    struck = replace(style_attrs(StyleKind.BODY), strikethrough=True)
    assert attributes_to_style(struck).strike


def test_headings_are_underlined(style_attrs: Attrs) -> None:
    """Heading-scale text is bold and underlined; inline bold is not underlined."""
    h1 = attributes_to_style(style_attrs(StyleKind.H1))
    assert h1.bold
    assert h1.underline
    assert not attributes_to_style(style_attrs(StyleKind.BOLD)).underline


def test_quote_and_code_colors(style_attrs: Attrs) -> None:
    """Quote and code carry their configured colors."""
    quote = attributes_to_style(style_attrs(StyleKind.QUOTE))
    assert quote.color == Color.parse("grey62")
    assert quote.bgcolor == Color.parse("grey15")
    code = attributes_to_style(style_attrs(StyleKind.CODE))
    assert code.bgcolor == Color.parse("grey19")


def test_to_rich_text_spans() -> None:
    """Each run becomes one span over the document's plain text."""
    text = to_rich_text(render("a **b**\n> c"))
    assert text.plain == "a b\nc"
    bold = [span for span in text.spans if isinstance(span.style, Style) and span.style.bold]
    assert [(span.start, span.end) for span in bold] == [(2, 3)]


def test_to_rich_text_empty_document() -> None:
    """An empty document renders as empty text."""
    assert to_rich_text(render("")).plain == ""
