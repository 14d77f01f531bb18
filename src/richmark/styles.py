"""Style kinds, fonts, text styles and the style registry."""

from __future__ import annotations

import enum
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType

DEFAULT_BODY_SIZE = 17.0
DEFAULT_COLOR = "default"
QUOTE_COLOR = "grey62"
QUOTE_BACKGROUND = "grey15"
CODE_BACKGROUND = "grey19"

# Point-size offsets from the body size for H1..H6.
HEADING_SIZE_DELTAS = (11, 7, 3, 1, -1, -3)
CODE_SIZE_DELTA = -2


class StyleKind(enum.Enum):
    """Named styles an editor can apply."""

    BODY = "body"
    H1 = "h1"
    H2 = "h2"
    H3 = "h3"
    H4 = "h4"
    H5 = "h5"
    H6 = "h6"
    BOLD = "bold"
    ITALIC = "italic"
    STRIKETHROUGH = "strikethrough"
    CODE = "code"
    QUOTE = "quote"

    @classmethod
    def heading(cls, level: int) -> StyleKind:
        """Return the heading kind for level 1..6."""
        if not 1 <= level <= len(HEADING_SIZE_DELTAS):
            msg = f"Heading level must be between 1 and 6, got {level}"
            raise ValueError(msg)
        return cls(f"h{level}")

    @property
    def heading_level(self) -> int | None:
        """Heading level 1..6, or None for non-heading kinds."""
        if self.value.startswith("h") and self.value[1:].isdigit():
            return int(self.value[1:])
        return None


class Traits(enum.Flag):
    """Symbolic font traits."""

    NONE = 0
    BOLD = enum.auto()
    ITALIC = enum.auto()
    MONOSPACE = enum.auto()


# No monospace face carries a slanted variant.
_INEXPRESSIBLE = (Traits.MONOSPACE | Traits.ITALIC,)


@dataclass(frozen=True)
class Font:
    """A font reduced to what the converter inspects: point size and traits."""

    size: float
    traits: Traits = Traits.NONE

    @property
    def bold(self) -> bool:
        return Traits.BOLD in self.traits

    @property
    def italic(self) -> bool:
        return Traits.ITALIC in self.traits

    @property
    def monospace(self) -> bool:
        return Traits.MONOSPACE in self.traits

    def with_traits(self, traits: Traits) -> Font | None:
        """Return this font with ``traits`` at the same size.

        Returns None when no face can express the combined trait set.
        """
        for combo in _INEXPRESSIBLE:
            if combo in traits:
                return None
        return Font(self.size, traits)


@dataclass(frozen=True)
class ParagraphStyle:
    """Paragraph-level spacing carried by every run of a line."""

    spacing_before: float = 0.0
    spacing_after: float = 0.0
    line_spacing: float = 0.0


@dataclass(frozen=True)
class TextStyle:
    """Visual appearance of one style kind."""

    font: Font
    color: str = DEFAULT_COLOR
    background: str | None = None
    padding_top: float = 0.0
    padding_bottom: float = 0.0

    @classmethod
    def default(cls, size: float = DEFAULT_BODY_SIZE) -> TextStyle:
        """Plain body text at ``size``."""
        return cls(font=Font(size), color=DEFAULT_COLOR)


class VerticalEdge(enum.Enum):
    """Which paragraph padding a :meth:`StyleRegistry.with_padding` call sets."""

    TOP = "top"
    BOTTOM = "bottom"
    VERTICAL = "vertical"


def computed_defaults(body: TextStyle) -> dict[StyleKind, TextStyle]:
    """Derive every style from the body style's size and color."""
    size = body.font.size
    color = body.color
    styles = {StyleKind.BODY: body}
    for level, delta in enumerate(HEADING_SIZE_DELTAS, start=1):
        styles[StyleKind.heading(level)] = TextStyle(Font(size + delta, Traits.BOLD), color)
    styles[StyleKind.BOLD] = TextStyle(Font(size, Traits.BOLD), color)
    styles[StyleKind.ITALIC] = TextStyle(Font(size, Traits.ITALIC), color)
    styles[StyleKind.STRIKETHROUGH] = TextStyle(Font(size), color)
    styles[StyleKind.CODE] = TextStyle(
        Font(size + CODE_SIZE_DELTA, Traits.MONOSPACE), color, background=CODE_BACKGROUND
    )
    styles[StyleKind.QUOTE] = TextStyle(Font(size), QUOTE_COLOR, background=QUOTE_BACKGROUND)
    return styles


class StyleRegistry(Mapping[StyleKind, TextStyle]):
    """Immutable mapping holding exactly one TextStyle per StyleKind.

    Kinds without an override get defaults computed from the body style.
    Changing a style produces a new registry; callers swap registries between
    conversions, never during one.
    """

    def __init__(
        self,
        overrides: Mapping[StyleKind, TextStyle] | None = None,
        *,
        line_spacing: float = 0.0,
    ) -> None:
        overrides = dict(overrides or {})
        body = overrides.get(StyleKind.BODY, TextStyle.default())
        styles = computed_defaults(body)
        styles.update(overrides)
        missing = set(StyleKind) - styles.keys()
        if missing:
            msg = f"Style registry is missing {sorted(k.value for k in missing)}"
            raise KeyError(msg)
        self._styles = MappingProxyType(styles)
        self.line_spacing = line_spacing

    def __getitem__(self, kind: StyleKind) -> TextStyle:
        return self._styles[kind]

    def __iter__(self) -> Iterator[StyleKind]:
        return iter(StyleKind)

    def __len__(self) -> int:
        return len(self._styles)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StyleRegistry):
            return NotImplemented
        return dict(self._styles) == dict(other._styles) and self.line_spacing == other.line_spacing

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"StyleRegistry(body={self[StyleKind.BODY]!r}, line_spacing={self.line_spacing})"

    @property
    def body(self) -> TextStyle:
        return self[StyleKind.BODY]

    def with_style(self, kind: StyleKind, style: TextStyle) -> StyleRegistry:
        """Return a registry with ``kind`` replaced by ``style``."""
        styles = dict(self._styles)
        styles[kind] = style
        return StyleRegistry(styles, line_spacing=self.line_spacing)

    def with_padding(self, kind: StyleKind, edge: VerticalEdge, value: float) -> StyleRegistry:
        """Return a registry with paragraph padding of ``kind`` set on ``edge``."""
        style = self[kind]
        if edge is VerticalEdge.TOP:
            style = replace(style, padding_top=value)
        elif edge is VerticalEdge.BOTTOM:
            style = replace(style, padding_bottom=value)
        else:
            style = replace(style, padding_top=value, padding_bottom=value)
        return self.with_style(kind, style)

    def with_line_spacing(self, value: float) -> StyleRegistry:
        """Return a registry with a different line spacing."""
        return StyleRegistry(dict(self._styles), line_spacing=value)
