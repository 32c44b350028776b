"""Terminal JSON viewer application."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from textual.app import App, ComposeResult

from vj.config import Settings, resolve_settings
from vj.render import THEMES
from vj.widget import JsonViewer

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def decode_documents(text: str) -> object:
    """Decode *text* into one JSON value.

    Several concatenated documents (JSON Lines, or values separated by
    whitespace) are wrapped into a list, one element per document.
    Raises ValueError on empty or malformed input.
    """
    decoder = json.JSONDecoder()
    documents: list[object] = []
    pos = 0
    end = len(text)
    while True:
        while pos < end and text[pos].isspace():
            pos += 1
        if pos >= end:
            break
        try:
            value, pos = decoder.raw_decode(text, pos)
        except json.JSONDecodeError as e:
            raise ValueError(
                f"invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})"
            ) from e
        documents.append(value)

    if not documents:
        raise ValueError("no JSON input")
    if len(documents) == 1:
        return documents[0]
    logger.debug("wrapped %d documents into a top-level array", len(documents))
    return documents


def configure_logging(settings: Settings) -> None:
    """Log to a file when asked; never to the terminal the TUI draws on."""
    if settings.log_file:
        logging.basicConfig(
            filename=settings.log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )
    else:
        package_logger = logging.getLogger("vj")
        package_logger.addHandler(logging.NullHandler())
        package_logger.propagate = False


class JsonViewerApp(App):
    """TUI app that wraps the JsonViewer widget."""

    CSS = """
    Screen {
        layout: vertical;
    }
    #viewer {
        height: 1fr;
    }
    """

    TITLE = "vj"
    BINDINGS = []
    ENABLE_COMMAND_PALETTE = False

    def __init__(
        self,
        value: object = None,
        *,
        source: str = "",
        settings: Settings | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.value = value
        self.source = source
        self.settings = settings or Settings()

    def compose(self) -> ComposeResult:
        yield JsonViewer(
            self.value,
            theme=self.settings.theme,
            margin=self.settings.margin,
            id="viewer",
        )

    def on_mount(self) -> None:
        self.sub_title = self.source or "<stdin>"
        self.query_one("#viewer").focus()

    def on_json_viewer_quit(self, event: JsonViewer.Quit) -> None:
        self.exit()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vj",
        description="JSON viewer with vim-style keybindings",
        epilog="Reads from stdin when no file is given and input is piped, "
        "e.g. curl ... | vj",
    )
    parser.add_argument(
        "file",
        nargs="?",
        default="",
        help="JSON or JSON Lines file to view",
    )
    parser.add_argument(
        "-v", "-V", "--version",
        action="version",
        version=f"vj {__version__}",
    )
    parser.add_argument(
        "--theme",
        choices=sorted(THEMES),
        default=None,
        help="colour theme (default: $VJ_THEME or dark)",
    )
    parser.add_argument(
        "--margin",
        type=int,
        default=None,
        help="rows kept between the cursor and the window edge "
        "(default: $VJ_MARGIN or 3)",
    )
    parser.add_argument(
        "--log",
        metavar="FILE",
        default=None,
        help="write debug logs to FILE (default: $VJ_LOG)",
    )
    return parser


def read_input(file_path: str) -> str:
    """Read the document from *file_path*, or from stdin when it is empty."""
    if file_path:
        return Path(file_path).read_text(encoding="utf-8")
    return sys.stdin.read()


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.file and sys.stdin.isatty():
        parser.print_help()
        return

    try:
        settings = resolve_settings(
            theme=args.theme, margin=args.margin, log_file=args.log
        )
    except ValueError as exc:
        print(f"vj: {exc}", file=sys.stderr)
        sys.exit(1)
    configure_logging(settings)

    try:
        value = decode_documents(read_input(args.file))
    except (OSError, ValueError) as exc:
        print(f"vj: {exc}", file=sys.stderr)
        sys.exit(1)

    if not args.file:
        # keys must come from the terminal once the document has been piped in
        try:
            tty = os.open("/dev/tty", os.O_RDONLY)
        except OSError as exc:
            print(f"vj: cannot open terminal: {exc}", file=sys.stderr)
            sys.exit(1)
        os.dup2(tty, sys.stdin.fileno())
        os.close(tty)

    app = JsonViewerApp(value, source=args.file, settings=settings)
    app.run()


if __name__ == "__main__":
    main()
