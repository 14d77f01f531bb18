"""WYSIWYG markdown editor widget.

The widget owns a StyledDocument rendered from markdown. A TextArea shows and
edits its plain text; a preview below shows the styled runs. Formatting
commands toggle styles over the TextArea selection, and every change is
published as markdown through ``MarkdownEditor.Changed``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

from textual.binding import Binding
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Static, TextArea
from textual.widgets.text_area import Selection as TextAreaSelection

from richmark.convert import render, serialize
from richmark.document import Selection, TextAttributes
from richmark.preview import to_rich_text
from richmark.styles import ParagraphStyle, StyleRegistry
from richmark.toggle import apply_toggle
from richmark.tui.widgets.format_menu import FORMAT_COMMANDS, FormatMenu

if TYPE_CHECKING:
    from textual.app import ComposeResult
    from textual.binding import BindingType

    from richmark.document import StyledDocument
    from richmark.styles import StyleKind
    from richmark.toggle import ToggleMode

logger = logging.getLogger(__name__)

# Shortcuts shown in the footer; the rest are listed in the format menu.
FOOTER_COMMANDS = frozenset({"bold", "italic"})


def location_to_offset(text: str, location: tuple[int, int]) -> int:
    """Convert a TextArea (row, column) location into a character offset."""
    row, column = location
    lines = text.split("\n")
    row = min(row, len(lines) - 1)
    return sum(len(line) + 1 for line in lines[:row]) + min(column, len(lines[row]))


def offset_to_location(text: str, offset: int) -> tuple[int, int]:
    """Convert a character offset into a TextArea (row, column) location."""
    offset = min(max(offset, 0), len(text))
    before = text[:offset]
    return before.count("\n"), offset - (before.rfind("\n") + 1)


def text_diff(old: str, new: str) -> tuple[int, int, int]:
    """Return ``(start, old_end, new_end)`` of the region that differs."""
    limit = min(len(old), len(new))
    start = 0
    while start < limit and old[start] == new[start]:
        start += 1
    suffix = 0
    while suffix < limit - start and old[-1 - suffix] == new[-1 - suffix]:
        suffix += 1
    return start, len(old) - suffix, len(new) - suffix


def typing_attributes(
    document: StyledDocument, offset: int, registry: StyleRegistry
) -> TextAttributes:
    """Attributes for text typed at ``offset``.

    Typed text continues the character before it on the same line, else the
    one after it; on an empty line it is body text.
    """
    text = document.text
    if offset > 0 and text[offset - 1] != "\n":
        return document.attributes_at(offset - 1)
    if offset < len(text) and text[offset] != "\n":
        return document.attributes_at(offset)
    body = registry.body
    return TextAttributes.from_style(
        body,
        ParagraphStyle(body.padding_top, body.padding_bottom, registry.line_spacing),
    )


class MarkdownEditor(Widget):
    """Styled text editor bound to a markdown string.

    Posts ``Changed`` whenever an edit or a formatting command changes the
    markdown. ``set_markdown`` replaces the content from outside without
    posting.
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        *[
            Binding(
                command.key,
                f"format('{command_id}')",
                command.label,
                show=command_id in FOOTER_COMMANDS,
                priority=True,
            )
            for command_id, command in FORMAT_COMMANDS.items()
        ],
        Binding("f2", "open_format_menu", "Format", show=True, priority=True),
    ]

    DEFAULT_CSS = """
    MarkdownEditor {
        height: 1fr;
        layout: vertical;
    }
    MarkdownEditor #editor-text {
        height: 1fr;
        border: round $accent;
    }
    MarkdownEditor #editor-preview {
        height: 1fr;
        padding: 0 1;
        border: round $primary;
        overflow-y: auto;
    }
    """

    class Changed(Message):
        """Posted when the editor's markdown changes through the editor."""

        def __init__(self, editor: MarkdownEditor, markdown: str) -> None:
            super().__init__()
            self.editor = editor
            self.markdown = markdown

    def __init__(
        self,
        markdown: str = "",
        registry: StyleRegistry | None = None,
        *,
        id: str | None = None,  # noqa: A002
    ) -> None:
        super().__init__(id=id)
        self._style_registry = registry if registry is not None else StyleRegistry()
        self._document = render(markdown, self._style_registry)

    def compose(self) -> ComposeResult:
        yield TextArea(self._document.text, id="editor-text")
        yield Static(to_rich_text(self._document), id="editor-preview")

    def on_mount(self) -> None:
        """Focus the text area."""
        self._text_area.focus()

    @property
    def _text_area(self) -> TextArea:
        return self.query_one("#editor-text", TextArea)

    # === State ===

    @property
    def document(self) -> StyledDocument:
        return self._document

    @property
    def registry(self) -> StyleRegistry:
        return self._style_registry

    @property
    def markdown(self) -> str:
        """The current content as markdown."""
        return serialize(self._document)

    @property
    def selected_range(self) -> Selection:
        """The TextArea selection as a range over the document's plain text."""
        text_area = self._text_area
        text = text_area.text
        start = location_to_offset(text, text_area.selection.start)
        end = location_to_offset(text, text_area.selection.end)
        low, high = sorted((start, end))
        return Selection(low, high - low)

    def select_range(self, offset: int, length: int) -> None:
        """Select ``[offset, offset + length)`` in the text area."""
        text_area = self._text_area
        text = text_area.text
        text_area.selection = TextAreaSelection(
            offset_to_location(text, offset), offset_to_location(text, offset + length)
        )

    def set_markdown(self, markdown: str) -> None:
        """Replace the content when ``markdown`` differs from the current markdown."""
        if markdown == self.markdown:
            return
        logger.debug("Rebuilding document from %d characters of markdown", len(markdown))
        text_area = self._text_area
        previous = self.selected_range
        self._document = render(markdown, self._style_registry)
        text_area.load_text(self._document.text)
        if previous.end <= len(self._document):
            self.select_range(previous.offset, previous.length)
        self._refresh_preview()

    def set_registry(self, registry: StyleRegistry) -> None:
        """Swap the style registry and re-render the current markdown with it."""
        markdown = self.markdown
        self._style_registry = registry
        self._document = render(markdown, registry)
        self._refresh_preview()

    # === Editing ===

    def sync_text(self, text: str) -> None:
        """Fold a plain-text edit from the text area into the document."""
        old = self._document.text
        if text == old:
            return
        start, old_end, new_end = text_diff(old, text)
        attributes = typing_attributes(self._document, start, self._style_registry)
        self._document.replace(start, old_end, text[start:new_end], attributes)
        self._publish()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        """Keep the document in step with typing."""
        event.stop()
        self.sync_text(event.text_area.text)

    def toggle(self, kind: StyleKind, mode: ToggleMode | None = None) -> None:
        """Toggle ``kind`` over the current selection."""
        selection = self.selected_range
        if selection.is_empty:
            self.notify("Select text to format.")
            return
        text_area = self._text_area
        saved = text_area.selection
        apply_toggle(self._document, selection, kind, mode, registry=self._style_registry)
        text_area.selection = saved
        self._publish()

    def _refresh_preview(self) -> None:
        self.query_one("#editor-preview", Static).update(to_rich_text(self._document))

    def _publish(self) -> None:
        self._refresh_preview()
        self.post_message(self.Changed(self, self.markdown))

    # === Actions ===

    def action_format(self, command_id: str) -> None:
        """Run a formatting command by ID."""
        command = FORMAT_COMMANDS[command_id]
        self.toggle(command.kind, command.mode)

    def action_open_format_menu(self) -> None:
        """Open the format menu for the current selection."""
        if self.selected_range.is_empty:
            self.notify("Select text to format.")
            return
        self.app.push_screen(FormatMenu(), self._on_format_chosen)

    def _on_format_chosen(self, command_id: str | None) -> None:
        if command_id is not None:
            self.action_format(command_id)
