"""Format menu: the formatting commands and the modal list that offers them."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, NamedTuple

from rich.text import Text
from textual.binding import Binding
from textual.screen import ModalScreen
from textual.widgets import OptionList
from textual.widgets.option_list import Option

from richmark.styles import StyleKind
from richmark.toggle import ToggleMode

if TYPE_CHECKING:
    from textual.app import ComposeResult
    from textual.binding import BindingType


class FormatCommand(NamedTuple):
    """A formatting command and the key that runs it."""

    label: str
    kind: StyleKind
    mode: ToggleMode | None  # None picks the kind's default mode
    key: str


FORMAT_COMMANDS: dict[str, FormatCommand] = {
    "bold": FormatCommand("Bold", StyleKind.BOLD, None, "alt+b"),
    "italic": FormatCommand("Italic", StyleKind.ITALIC, None, "alt+i"),
    "strikethrough": FormatCommand("Strikethrough", StyleKind.STRIKETHROUGH, None, "alt+s"),
    "code": FormatCommand("Code", StyleKind.CODE, None, "alt+c"),
    "quote": FormatCommand("Quote", StyleKind.QUOTE, None, "alt+q"),
    **{
        f"h{level}": FormatCommand(
            f"Heading {level}", StyleKind.heading(level), None, f"alt+{level}"
        )
        for level in range(1, 7)
    },
    "clear": FormatCommand("Clear Formatting", StyleKind.BODY, ToggleMode.SWAP, "alt+0"),
}


def command_prompt(command: FormatCommand) -> Text:
    """Menu line for a command: its label, then its shortcut dimmed."""
    return Text.assemble(f"{command.label:<18}", (command.key.replace("alt+", "Alt+"), "dim"))


class FormatMenu(ModalScreen[str | None]):
    """Pick a formatting command for the current selection.

    Enter picks the highlighted command; a command's own shortcut picks it
    directly. Dismisses with the command ID, or None on escape.
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("escape", "cancel", "Close", show=False),
        *[
            Binding(command.key, f"choose('{command_id}')", command.label, show=False)
            for command_id, command in FORMAT_COMMANDS.items()
        ],
    ]

    DEFAULT_CSS = """
    FormatMenu {
        align: center middle;
    }
    FormatMenu > OptionList {
        width: 34;
        height: auto;
        max-height: 17;
        background: $surface;
        border: round $primary;
    }
    """

    def compose(self) -> ComposeResult:
        options = OptionList(
            *[
                Option(command_prompt(command), id=command_id)
                for command_id, command in FORMAT_COMMANDS.items()
            ],
            id="format-options",
        )
        options.border_title = "Format"
        yield options

    def on_mount(self) -> None:
        """Highlight the first command and take focus."""
        options = self.query_one("#format-options", OptionList)
        options.highlighted = 0
        options.focus()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        self.dismiss(event.option_id)

    def action_choose(self, command_id: str) -> None:
        self.dismiss(command_id)

    def action_cancel(self) -> None:
        self.dismiss(None)
