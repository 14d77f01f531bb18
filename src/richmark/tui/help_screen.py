"""Help screen: modal overlay showing keybindings."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from textual.containers import Center, Middle
from textual.screen import ModalScreen
from textual.widgets import Static

if TYPE_CHECKING:
    from textual.app import ComposeResult
    from textual.binding import BindingType

_EDITOR_HELP = """\
[bold]Editor Keybindings[/bold]

[bold]Formatting[/bold] (applies to the selection)
  [bold]Alt+b[/bold]       Bold
  [bold]Alt+i[/bold]       Italic
  [bold]Alt+s[/bold]       Strikethrough
  [bold]Alt+c[/bold]       Code
  [bold]Alt+q[/bold]       Quote
  [bold]Alt+1..6[/bold]    Heading 1-6
  [bold]Alt+0[/bold]       Clear formatting
  [bold]F2[/bold]          Format menu

Running a command on text that already has the
style removes it again.

[bold]File[/bold]
  [bold]Ctrl+s[/bold]      Save
  [bold]Ctrl+q[/bold]      Quit
  [bold]F1[/bold]          This help

Press [bold]F1[/bold] or [bold]Escape[/bold] to dismiss.
"""


class HelpScreen(ModalScreen[None]):
    """Modal help overlay showing all keybindings."""

    BINDINGS: ClassVar[list[BindingType]] = [
        ("escape", "dismiss_help", "Close"),
        ("f1", "dismiss_help", "Close"),
    ]

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }
    HelpScreen > Center > Middle > Static {
        width: 56;
        padding: 2 4;
        background: $surface;
        border: tall $primary;
    }
    """

    def compose(self) -> ComposeResult:
        """Create the help content."""
        with Center(), Middle():
            yield Static(_EDITOR_HELP, markup=True)

    def action_dismiss_help(self) -> None:
        """Dismiss the help screen."""
        self.dismiss(None)
