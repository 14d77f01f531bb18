"""CLI entry point and subcommand definitions."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn

from rich.console import Console

from richmark.config import ConfigError, get_config_path, load_registry
from richmark.convert import render, serialize
from richmark.document import Selection
from richmark.preview import to_rich_text
from richmark.styles import StyleKind, StyleRegistry
from richmark.toggle import ToggleMode, apply_toggle

STDIN_PATH = "-"


def _fail(message: str) -> NoReturn:
    print(message, file=sys.stderr)
    sys.exit(1)


def _read_source(path: str) -> str:
    """Read markdown from a file, or from stdin when path is '-'."""
    if path == STDIN_PATH:
        return sys.stdin.read()
    try:
        return Path(path).read_text()
    except OSError as e:
        _fail(f"Cannot read {path}: {e.strerror or e}")


def _load_registry(args: argparse.Namespace) -> StyleRegistry:
    config_path = Path(args.config) if args.config else get_config_path()
    try:
        return load_registry(config_path)
    except ConfigError as e:
        _fail(f"Config error: {e}")


def _parse_style(name: str) -> StyleKind:
    """Map a CLI style name (body, h1..h6, bold, …, or 'clear') to a StyleKind."""
    if name == "clear":
        return StyleKind.BODY
    try:
        return StyleKind(name)
    except ValueError:
        names = ", ".join([kind.value for kind in StyleKind] + ["clear"])
        _fail(f"Unknown style '{name}'. Expected one of: {names}")


def _cmd_render(args: argparse.Namespace) -> None:
    """Print the styled rendering of a markdown file."""
    registry = _load_registry(args)
    document = render(_read_source(args.path), registry)
    Console().print(to_rich_text(document))


def _cmd_normalize(args: argparse.Namespace) -> None:
    """Print the canonical markdown for a file (render, then serialize)."""
    registry = _load_registry(args)
    sys.stdout.write(serialize(render(_read_source(args.path), registry)))


def _cmd_toggle(args: argparse.Namespace) -> None:
    """Apply one formatting toggle and print or write the resulting markdown."""
    registry = _load_registry(args)
    kind = _parse_style(args.style)
    mode = ToggleMode(args.mode) if args.mode else None
    if args.style == "clear":
        mode = ToggleMode.SWAP
    if args.write and args.path == STDIN_PATH:
        _fail("--write needs a file path, not stdin")

    document = render(_read_source(args.path), registry)
    try:
        apply_toggle(document, Selection(args.offset, args.length), kind, mode, registry=registry)
    except ValueError as e:
        _fail(str(e))
    markdown = serialize(document)

    if not args.write:
        sys.stdout.write(markdown)
        return
    try:
        Path(args.path).write_text(markdown)
    except OSError as e:
        _fail(f"Cannot write {args.path}: {e.strerror or e}")


def _cmd_styles(args: argparse.Namespace) -> None:
    """Print the resolved style registry."""
    registry = _load_registry(args)
    print(f"{'Style':<14} {'Size':>5}  {'Traits':<20} {'Color':<12} {'Background':<12} Padding")
    print("─" * 80)
    for kind, style in registry.items():
        traits = ", ".join(t.name.lower() for t in style.font.traits if t.name) or "-"
        padding = f"{style.padding_top:g}/{style.padding_bottom:g}"
        print(
            f"{kind.value:<14} {style.font.size:>5g}  {traits:<20} "
            f"{style.color:<12} {style.background or '-':<12} {padding}"
        )
    print(f"\nline spacing: {registry.line_spacing:g}")


def _cmd_edit(args: argparse.Namespace) -> None:
    """Launch the Textual editor.

    Imports are deferred to avoid loading Textual for non-interactive commands.
    """
    from richmark.tui.app import EditorApp  # noqa: PLC0415

    registry = _load_registry(args)
    path = Path(args.path) if args.path else None
    EditorApp(path=path, registry=registry).run()


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and dispatch to the appropriate subcommand."""
    parser = argparse.ArgumentParser(
        prog="richmark",
        description="WYSIWYG markdown editing in the terminal",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--config",
        help=f"Path to styles.toml (default: {get_config_path()})",
    )
    subparsers = parser.add_subparsers(dest="command")

    # edit
    edit_parser = subparsers.add_parser("edit", help="Open the interactive editor")
    edit_parser.add_argument("path", nargs="?", help="Markdown file to edit")

    # render
    render_parser = subparsers.add_parser("render", help="Print styled markdown")
    render_parser.add_argument("path", help="Markdown file, or - for stdin")

    # normalize
    normalize_parser = subparsers.add_parser("normalize", help="Print canonical markdown")
    normalize_parser.add_argument("path", help="Markdown file, or - for stdin")

    # toggle
    toggle_parser = subparsers.add_parser("toggle", help="Toggle a style over a character range")
    toggle_parser.add_argument("path", help="Markdown file, or - for stdin")
    toggle_parser.add_argument("--offset", type=int, required=True, help="Selection start")
    toggle_parser.add_argument("--length", type=int, required=True, help="Selection length")
    toggle_parser.add_argument("--style", required=True, help="Style name, e.g. bold, h2, clear")
    toggle_parser.add_argument(
        "--mode",
        choices=[mode.value for mode in ToggleMode],
        help="Toggle mode (default depends on the style)",
    )
    toggle_parser.add_argument("--write", action="store_true", help="Write back to the file")

    # styles
    subparsers.add_parser("styles", help="Show the resolved style configuration")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command is None:
        parser.print_help()
        return

    dispatch = {
        "edit": _cmd_edit,
        "render": _cmd_render,
        "normalize": _cmd_normalize,
        "toggle": _cmd_toggle,
        "styles": _cmd_styles,
    }
    dispatch[args.command](args)
