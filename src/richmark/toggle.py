"""Selection-scoped style toggles over a styled document.

Each toggle inspects every run the selection touches and picks one direction
for the whole selection: if all runs are already at the target, it reverts;
otherwise it applies. A selection that is half bold and half plain therefore
becomes fully bold on the first toggle.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from richmark.styles import Font, StyleKind, StyleRegistry, Traits

if TYPE_CHECKING:
    from richmark.document import Selection, StyledDocument, TextAttributes
    from richmark.styles import TextStyle

logger = logging.getLogger(__name__)


class ToggleMode(enum.Enum):
    """How a toggle changes the runs it covers."""

    SWAP = "swap"  # replace font, color and background with a style's
    TRAIT = "trait"  # flip one font trait, keep everything else
    ATTRIBUTE = "attribute"  # flip the strikethrough flag


class Toggled(enum.Enum):
    """What a toggle did."""

    APPLIED = "applied"
    REVERTED = "reverted"
    UNCHANGED = "unchanged"


TRAIT_KINDS: dict[StyleKind, Traits] = {
    StyleKind.BOLD: Traits.BOLD,
    StyleKind.ITALIC: Traits.ITALIC,
}


def default_mode(kind: StyleKind) -> ToggleMode:
    """Mode an editor uses for ``kind`` when none is given."""
    if kind in TRAIT_KINDS:
        return ToggleMode.TRAIT
    if kind is StyleKind.STRIKETHROUGH:
        return ToggleMode.ATTRIBUTE
    return ToggleMode.SWAP


def apply_toggle(
    document: StyledDocument,
    selection: Selection,
    kind: StyleKind,
    mode: ToggleMode | None = None,
    *,
    registry: StyleRegistry | None = None,
) -> StyledDocument:
    """Apply or revert ``kind`` over ``selection``, mutating ``document`` in place.

    Returns the same document. Text length never changes, so the caller can
    restore its selection offsets as they were.
    """
    if registry is None:
        registry = StyleRegistry()
    if mode is None:
        mode = default_mode(kind)

    if mode is ToggleMode.SWAP:
        result = toggle_style(document, selection, registry[kind], registry)
    elif mode is ToggleMode.TRAIT:
        if kind not in TRAIT_KINDS:
            msg = f"{kind.value} has no font trait to toggle"
            raise ValueError(msg)
        result = toggle_trait(document, selection, TRAIT_KINDS[kind])
    else:
        if kind is not StyleKind.STRIKETHROUGH:
            msg = f"{kind.value} is not an attribute toggle"
            raise ValueError(msg)
        result = toggle_strikethrough(document, selection)

    logger.debug("Toggle %s (%s) over %s: %s", kind.value, mode.value, selection, result.value)
    return document


def clear_formatting(
    document: StyledDocument, selection: Selection, registry: StyleRegistry
) -> Toggled:
    """Reset the selection to the body style."""
    return toggle_style(document, selection, registry.body, registry)


def _covered(document: StyledDocument, selection: Selection) -> list[TextAttributes] | None:
    """Attributes of the runs under the clamped selection, or None when it is empty."""
    clamped = selection.clamp(len(document))
    if clamped != selection:
        logger.debug("Selection %s clamped to %s", selection, clamped)
    if clamped.is_empty:
        return None
    return [attributes for _start, _end, attributes in document.spans(clamped.offset, clamped.end)]


def _at_style(attributes: TextAttributes, style: TextStyle) -> bool:
    return (
        attributes.font == style.font
        and attributes.color == style.color
        and attributes.background == style.background
    )


def toggle_style(
    document: StyledDocument,
    selection: Selection,
    style: TextStyle,
    registry: StyleRegistry,
) -> Toggled:
    """Swap the selection to ``style``, or back to body if it is already there."""
    covered = _covered(document, selection)
    if covered is None:
        return Toggled.UNCHANGED

    revert = all(_at_style(attributes, style) for attributes in covered)
    target = registry.body if revert else style
    clamped = selection.clamp(len(document))
    document.map_attributes(
        clamped.offset, clamped.end, lambda attributes: attributes.with_style(target)
    )
    return Toggled.REVERTED if revert else Toggled.APPLIED


def toggle_trait(document: StyledDocument, selection: Selection, trait: Traits) -> Toggled:
    """Add ``trait`` to every run, or remove it when every run already has it."""
    covered = _covered(document, selection)
    if covered is None:
        return Toggled.UNCHANGED

    remove = all(trait in attributes.font.traits for attributes in covered)

    def flip(attributes: TextAttributes) -> TextAttributes:
        font = attributes.font
        traits = font.traits & ~trait if remove else font.traits | trait
        flipped = font.with_traits(traits)
        if flipped is None:
            # Removing falls back to a plain face; adding keeps the current one.
            flipped = Font(font.size) if remove else font
        return replace(attributes, font=flipped)

    clamped = selection.clamp(len(document))
    document.map_attributes(clamped.offset, clamped.end, flip)
    return Toggled.REVERTED if remove else Toggled.APPLIED


def toggle_strikethrough(document: StyledDocument, selection: Selection) -> Toggled:
    """Set the strikethrough flag, or clear it when every run already has it."""
    covered = _covered(document, selection)
    if covered is None:
        return Toggled.UNCHANGED

    remove = all(attributes.strikethrough for attributes in covered)
    clamped = selection.clamp(len(document))
    document.map_attributes(
        clamped.offset,
        clamped.end,
        lambda attributes: replace(attributes, strikethrough=not remove),
    )
    return Toggled.REVERTED if remove else Toggled.APPLIED
