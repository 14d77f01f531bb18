"""Tests for style kinds, fonts and the style registry."""

from __future__ import annotations

import pytest

from richmark.styles import (
    CODE_BACKGROUND,
    QUOTE_BACKGROUND,
    QUOTE_COLOR,
    Font,
    StyleKind,
    StyleRegistry,
    TextStyle,
    Traits,
    VerticalEdge,
)

# === Defaults ===


def test_default_registry_covers_every_kind(registry: StyleRegistry) -> None:
    """Every StyleKind has exactly one style."""
    assert len(registry) == len(StyleKind)
    assert set(registry) == set(StyleKind)


@pytest.mark.parametrize(
    ("kind", "size"),
    [
        (StyleKind.H1, 28),
        (StyleKind.H2, 24),
        (StyleKind.H3, 20),
        (StyleKind.H4, 18),
        (StyleKind.H5, 16),
        (StyleKind.H6, 14),
    ],
)
def test_default_heading_sizes(registry: StyleRegistry, kind: StyleKind, size: int) -> None:
    """Headings scale from the 17pt body by +11, +7, +3, +1, -1, -3 and are bold."""
    style = registry[kind]
    assert style.font == Font(size, Traits.BOLD)
    assert style.color == registry.body.color


def test_default_inline_styles(registry: StyleRegistry) -> None:
    """Bold/italic share the body size; code is smaller, monospace and shaded."""
    assert registry[StyleKind.BODY] == TextStyle.default()
    assert registry[StyleKind.BOLD].font == Font(17, Traits.BOLD)
    assert registry[StyleKind.ITALIC].font == Font(17, Traits.ITALIC)
    assert registry[StyleKind.STRIKETHROUGH].font == Font(17)
    code = registry[StyleKind.CODE]
    assert code.font == Font(15, Traits.MONOSPACE)
    assert code.background == CODE_BACKGROUND


def test_default_quote_style(registry: StyleRegistry) -> None:
    """Quotes keep the body font but use a muted color on a background."""
    quote = registry[StyleKind.QUOTE]
    assert quote.font == Font(17)
    assert quote.color == QUOTE_COLOR
    assert quote.background == QUOTE_BACKGROUND


def test_body_override_drives_computed_defaults() -> None:
    """A custom body size and color propagate to every non-overridden style."""
    body = TextStyle(Font(20), color="white")
    registry = StyleRegistry({StyleKind.BODY: body})
    assert registry[StyleKind.H1].font == Font(31, Traits.BOLD)
    assert registry[StyleKind.H6].font == Font(17, Traits.BOLD)
    assert registry[StyleKind.CODE].font == Font(18, Traits.MONOSPACE)
    assert registry[StyleKind.BOLD].color == "white"


def test_partial_override_keeps_other_defaults() -> None:
    """Overriding one kind leaves every other kind at its default."""
    h1 = TextStyle(Font(40, Traits.BOLD), color="red", padding_top=12)
    registry = StyleRegistry({StyleKind.H1: h1})
    assert registry[StyleKind.H1] == h1
    assert registry[StyleKind.H2] == StyleRegistry()[StyleKind.H2]


# === Replacement ===


@pytest.mark.parametrize(
    ("edge", "expected"),
    [
        (VerticalEdge.TOP, (6, 0)),
        (VerticalEdge.BOTTOM, (0, 6)),
        (VerticalEdge.VERTICAL, (6, 6)),
    ],
)
def test_with_padding_returns_new_registry(
    registry: StyleRegistry, edge: VerticalEdge, expected: tuple[int, int]
) -> None:
    """with_padding sets the requested edge(s) and leaves the original untouched."""
    padded = registry.with_padding(StyleKind.H2, edge, 6)
    style = padded[StyleKind.H2]
    assert (style.padding_top, style.padding_bottom) == expected
    assert registry[StyleKind.H2].padding_top == 0
    assert padded != registry


def test_with_style_and_line_spacing(registry: StyleRegistry) -> None:
    """Replacement helpers preserve everything they do not change."""
    code = TextStyle(Font(12, Traits.MONOSPACE), background=None)
    replaced = registry.with_style(StyleKind.CODE, code).with_line_spacing(4)
    assert replaced[StyleKind.CODE] == code
    assert replaced.line_spacing == 4
    assert replaced[StyleKind.H1] == registry[StyleKind.H1]
    assert registry.line_spacing == 0


def test_registry_equality(registry: StyleRegistry) -> None:
    """Registries compare by styles and line spacing."""
    assert registry == StyleRegistry()
    assert registry != StyleRegistry(line_spacing=1)


# === StyleKind / Font ===


def test_heading_lookup() -> None:
    """StyleKind.heading maps levels 1..6 and rejects anything else."""
    assert StyleKind.heading(1) is StyleKind.H1
    assert StyleKind.heading(6) is StyleKind.H6
    assert StyleKind.H3.heading_level == 3
    assert StyleKind.BOLD.heading_level is None
    with pytest.raises(ValueError, match="between 1 and 6"):
        StyleKind.heading(7)


def test_font_with_traits() -> None:
    """Trait changes keep the size; a slanted monospace face does not exist."""
    font = Font(15, Traits.MONOSPACE)
    assert Font(17).with_traits(Traits.BOLD | Traits.ITALIC) == Font(17, Traits.BOLD | Traits.ITALIC)
    assert font.with_traits(Traits.MONOSPACE | Traits.BOLD) == Font(15, Traits.MONOSPACE | Traits.BOLD)
    assert font.with_traits(Traits.MONOSPACE | Traits.ITALIC) is None
    assert font.monospace
    assert not font.bold
