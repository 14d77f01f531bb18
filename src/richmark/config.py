"""Style configuration: load and validate styles.toml into a StyleRegistry."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import replace
from pathlib import Path
from typing import Any

from rich.color import Color, ColorParseError

from richmark.styles import Font, StyleKind, StyleRegistry, TextStyle, Traits, computed_defaults

logger = logging.getLogger(__name__)

STYLE_FIELDS = frozenset(
    {"size", "bold", "italic", "monospace", "color", "background", "padding_top", "padding_bottom"}
)
_TRAIT_FIELDS = {"bold": Traits.BOLD, "italic": Traits.ITALIC, "monospace": Traits.MONOSPACE}
_TOP_LEVEL_KEYS = frozenset({"line_spacing", "styles"})


class ConfigError(Exception):
    """Raised when styles.toml is malformed or holds invalid values."""


def get_config_path() -> Path:
    """Return the path to styles.toml, respecting XDG_CONFIG_HOME."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "richmark" / "styles.toml"


def load_registry(path: Path) -> StyleRegistry:
    """Load a style registry from a TOML file.

    Returns the default registry if the file does not exist.
    Raises ConfigError on parse errors or invalid values.
    """
    if not path.exists():
        return StyleRegistry()

    try:
        data = tomllib.loads(path.read_text())
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigError(msg) from e

    return parse_registry(data, source=str(path))


def parse_registry(data: dict[str, Any], *, source: str = "<config>") -> StyleRegistry:
    """Build a registry from parsed TOML data.

    ``[styles.body]`` is resolved first because every other default derives
    from its size and color. Fields missing from a style table keep that
    kind's default.
    """
    for key in data.keys() - _TOP_LEVEL_KEYS:
        logger.warning("Ignoring unknown key '%s' in %s", key, source)

    line_spacing = _number(data.get("line_spacing", 0), f"line_spacing in {source}")

    raw_styles = data.get("styles", {})
    if not isinstance(raw_styles, dict):
        msg = f"'styles' in {source} must be a table"
        raise ConfigError(msg)

    kinds = {kind.value: kind for kind in StyleKind}
    for name in raw_styles:
        if name not in kinds:
            msg = f"Unknown style '{name}' in {source}; expected one of {', '.join(kinds)}"
            raise ConfigError(msg)

    body = _build_style(raw_styles.get("body", {}), TextStyle.default(), f"styles.body in {source}")
    defaults = computed_defaults(body)
    overrides = {StyleKind.BODY: body}
    for name, entry in raw_styles.items():
        kind = kinds[name]
        if kind is StyleKind.BODY:
            continue
        overrides[kind] = _build_style(entry, defaults[kind], f"styles.{name} in {source}")
    return StyleRegistry(overrides, line_spacing=line_spacing)


def _build_style(entry: object, base: TextStyle, where: str) -> TextStyle:
    if not isinstance(entry, dict):
        msg = f"{where} must be a table"
        raise ConfigError(msg)

    unknown = entry.keys() - STYLE_FIELDS
    if unknown:
        msg = f"{where} has unknown field(s): {', '.join(sorted(unknown))}"
        raise ConfigError(msg)

    size = base.font.size
    if "size" in entry:
        size = _number(entry["size"], f"size of {where}")
        if size <= 0:
            msg = f"size of {where} must be positive, got {size}"
            raise ConfigError(msg)

    traits = base.font.traits
    for field, trait in _TRAIT_FIELDS.items():
        if field not in entry:
            continue
        value = entry[field]
        if not isinstance(value, bool):
            msg = f"{field} of {where} must be true or false"
            raise ConfigError(msg)
        traits = traits | trait if value else traits & ~trait

    style = replace(base, font=Font(size, traits))
    if "color" in entry:
        style = replace(style, color=_color(entry["color"], f"color of {where}"))
    if "background" in entry:
        background = entry["background"]
        style = replace(
            style,
            background=_color(background, f"background of {where}") if background else None,
        )
    for field in ("padding_top", "padding_bottom"):
        if field in entry:
            style = replace(style, **{field: _number(entry[field], f"{field} of {where}")})
    return style


def _number(value: object, where: str) -> float:
    # bool is an int subclass; TOML true/false is never a size.
    if isinstance(value, bool) or not isinstance(value, int | float):
        msg = f"{where} must be a number, got {value!r}"
        raise ConfigError(msg)
    if value < 0:
        msg = f"{where} must not be negative, got {value}"
        raise ConfigError(msg)
    return float(value)


def _color(value: object, where: str) -> str:
    if not isinstance(value, str):
        msg = f"{where} must be a string, got {value!r}"
        raise ConfigError(msg)
    try:
        Color.parse(value)
    except ColorParseError as e:
        msg = f"{where} is not a valid color: {e}"
        raise ConfigError(msg) from e
    return value
