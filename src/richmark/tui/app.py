"""Textual App: standalone markdown editor."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from richmark.tui.help_screen import HelpScreen
from richmark.tui.widgets.markdown_editor import MarkdownEditor

if TYPE_CHECKING:
    from pathlib import Path

    from textual.binding import BindingType

    from richmark.styles import StyleRegistry

logger = logging.getLogger(__name__)


class EditorApp(App[None]):
    """Edit one markdown file with live styling."""

    TITLE = "richmark"

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("ctrl+s", "save", "Save", show=True, priority=True),
        Binding("f1", "show_help", "Help", show=True),
    ]

    def __init__(
        self,
        path: Path | None = None,
        registry: StyleRegistry | None = None,
        *,
        markdown: str | None = None,
    ) -> None:
        super().__init__()
        self._path = path
        self._style_registry = registry
        if markdown is None:
            markdown = path.read_text() if path is not None and path.exists() else ""
        self._initial_markdown = markdown
        self.unsaved = False

    def compose(self) -> ComposeResult:
        """Create the editor layout."""
        yield Header()
        yield MarkdownEditor(self._initial_markdown, self._style_registry, id="editor")
        yield Footer()

    def on_mount(self) -> None:
        self._update_subtitle()

    @property
    def editor(self) -> MarkdownEditor:
        return self.query_one(MarkdownEditor)

    def _update_subtitle(self) -> None:
        name = self._path.name if self._path is not None else "untitled"
        self.sub_title = f"{name}*" if self.unsaved else name

    def on_markdown_editor_changed(self, _event: MarkdownEditor.Changed) -> None:
        """Mark the buffer as modified."""
        self.unsaved = True
        self._update_subtitle()

    # === Actions ===

    def action_save(self) -> None:
        """Write the current markdown back to the file."""
        if self._path is None:
            self.notify("No file to save to.", severity="warning")
            return
        try:
            self._path.write_text(self.editor.markdown)
        except OSError as e:
            logger.warning("Failed to save %s", self._path, exc_info=True)
            self.notify(f"Error saving {self._path}: {e}", severity="error")
            return
        self.unsaved = False
        self._update_subtitle()
        self.notify(f"Saved {self._path}")

    def action_show_help(self) -> None:
        """Show the help overlay."""
        self.push_screen(HelpScreen())
