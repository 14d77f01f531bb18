"""Tests for the editor widget's offset and typing helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from richmark.convert import render
from richmark.styles import ParagraphStyle, StyleKind, StyleRegistry
from richmark.tui.widgets.format_menu import FORMAT_COMMANDS, command_prompt
from richmark.tui.widgets.markdown_editor import (
    MarkdownEditor,
    location_to_offset,
    offset_to_location,
    text_diff,
    typing_attributes,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from richmark.document import TextAttributes

    Attrs = Callable[[StyleKind], TextAttributes]


@pytest.mark.parametrize(
    ("location", "offset"),
    [((0, 0), 0), ((0, 2), 2), ((1, 0), 3), ((1, 1), 4), ((0, 9), 2), ((7, 0), 3)],
)
def test_location_to_offset(location: tuple[int, int], offset: int) -> None:
    """Rows and columns map onto plain-text offsets, clamped to the text."""
    assert location_to_offset("ab\ncd", location) == offset


@pytest.mark.parametrize(
    ("offset", "location"),
    [(0, (0, 0)), (2, (0, 2)), (3, (1, 0)), (5, (1, 2)), (99, (1, 2)), (-1, (0, 0))],
)
def test_offset_to_location(offset: int, location: tuple[int, int]) -> None:
    """Offsets map back onto rows and columns."""
    assert offset_to_location("ab\ncd", offset) == location


@pytest.mark.parametrize(
    ("old", "new", "expected"),
    [
        ("hello", "hexllo", (2, 2, 3)),
        ("hello", "helo", (3, 4, 3)),
        ("abc", "axc", (1, 2, 2)),
        ("abc", "abc", (3, 3, 3)),
        ("", "new", (0, 0, 3)),
        ("gone", "", (0, 4, 0)),
    ],
)
def test_text_diff(old: str, new: str, expected: tuple[int, int, int]) -> None:
    """text_diff finds the single changed region between two texts."""
    assert text_diff(old, new) == expected


def test_typing_continues_previous_character(style_attrs: Attrs) -> None:
    """Typed text takes the style of the character before it."""
    doc = render("a **b**\n# T")
    assert typing_attributes(doc, 3, StyleRegistry()) == style_attrs(StyleKind.BOLD)
    assert typing_attributes(doc, 5, StyleRegistry()) == style_attrs(StyleKind.H1)


def test_typing_at_line_start_uses_next_character(style_attrs: Attrs) -> None:
    """At the start of a line the following character decides."""
    doc = render("x\n# T")
    assert typing_attributes(doc, 2, StyleRegistry()) == style_attrs(StyleKind.H1)
    assert typing_attributes(doc, 0, StyleRegistry()) == style_attrs(StyleKind.BODY)


def test_typing_on_empty_line_is_body() -> None:
    """An empty line gets body text with the registry's paragraph spacing."""
    registry = StyleRegistry(line_spacing=2)
    doc = render("# A\n\n# B", registry)
    attributes = typing_attributes(doc, 2, registry)
    assert attributes.font == registry.body.font
    assert attributes.paragraph == ParagraphStyle(0, 0, 2)


def test_every_format_command_has_a_key() -> None:
    """Each formatting command is reachable from a key binding."""
    actions = {binding.action for binding in MarkdownEditor.BINDINGS if hasattr(binding, "action")}
    for command_id in FORMAT_COMMANDS:
        assert f"format('{command_id}')" in actions


def test_command_prompt_shows_shortcut() -> None:
    """Menu lines pair each label with its key."""
    assert str(command_prompt(FORMAT_COMMANDS["bold"])).split() == ["Bold", "Alt+b"]
    assert str(command_prompt(FORMAT_COMMANDS["clear"])).endswith("Alt+0")
