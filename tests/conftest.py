"""Shared fixtures: default registry, attribute builders, isolated config home."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from richmark.document import TextAttributes
from richmark.styles import StyleKind, StyleRegistry

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.fixture(autouse=True)
def isolated_config_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory so user styles never leak in."""
    config_home = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def registry() -> StyleRegistry:
    """The default style registry (body size 17)."""
    return StyleRegistry()


@pytest.fixture
def style_attrs(registry: StyleRegistry) -> Callable[[StyleKind], TextAttributes]:
    """Build the run attributes a freshly rendered line of a given kind carries."""

    def build(kind: StyleKind) -> TextAttributes:
        return TextAttributes.from_style(registry[kind])

    return build
