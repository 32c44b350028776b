"""Modal JSON viewer widget."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from rich.text import Text
from textual import events
from textual.message import Message
from textual.widget import Widget

from vj._fold import FoldMixin
from vj._search import SearchMixin
from vj.history import InputHistory
from vj.navigator import Navigator
from vj.render import DEFAULT_THEME, THEMES, Theme, render_line
from vj.status import Status, describe
from vj.viewport import DEFAULT_MARGIN


class ViewerMode(Enum):
    NORMAL = auto()
    COMMAND = auto()
    SEARCH = auto()
    ERROR = auto()


class JsonViewer(FoldMixin, SearchMixin, Widget, can_focus=True):
    """A read-only, foldable JSON tree Textual widget.

    Supported commands:
      NORMAL: j k (with counts, e.g. 5j)  g G  h l  za zM zR  { }
              / n N  ctrl+d ctrl+u  PgUp/PgDn
      COMMAND: :.path  :<line>  :$  :q
    """

    DEFAULT_CSS = """
    JsonViewer {
        height: 1fr;
        background: $surface;
        padding: 0 1;
    }
    """

    # -- Messages ----------------------------------------------------------

    @dataclass
    class Quit(Message):
        pass

    # -- Init --------------------------------------------------------------

    def __init__(
        self,
        value: object = None,
        *,
        theme: Theme | str = DEFAULT_THEME,
        margin: int = DEFAULT_MARGIN,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self.render_theme: Theme = THEMES[theme] if isinstance(theme, str) else theme
        self._scroll_margin: int = margin
        self.nav: Navigator = Navigator.from_value(value, margin=margin)
        self._mode: ViewerMode = ViewerMode.NORMAL
        self.command_buffer: str = ""
        self.pending: str = ""
        self.status_msg: str = self.nav.current_path_label
        self._search_buffer: str = ""
        self._search_history: InputHistory = InputHistory()
        self._command_history: InputHistory = InputHistory()

    # -- Public API --------------------------------------------------------

    def set_value(self, value: object) -> None:
        """Replace the document; folds, cursor and search are reset."""
        height = self.nav.viewport.height
        self.nav = Navigator.from_value(value, height=height, margin=self._scroll_margin)
        self.status_msg = self.nav.current_path_label
        self.refresh()

    def _visible_height(self) -> int:
        return max(1, self.content_region.height - 2)

    # =====================================================================
    # Rendering
    # =====================================================================

    _MODE_STYLE = {
        ViewerMode.NORMAL: "bold white on dark_green",
        ViewerMode.COMMAND: "bold white on dark_red",
        ViewerMode.SEARCH: "bold white on dark_magenta",
        ViewerMode.ERROR: "bold white on red",
    }

    def render(self) -> Text:
        width = self.content_region.width
        height = self.content_region.height
        if height < 3 or width < 10:
            return Text("(too small)")

        content_height = height - 2
        nav = self.nav
        if nav.viewport.height != content_height:
            nav.resize(content_height)

        # Local references for hot path
        theme = self.render_theme
        cursor = nav.cursor
        first = nav.viewport.first_visible_line
        virtual_to_real = nav.virtual_to_real
        result = Text()
        result_append = result.append
        ln_width = max(4, len(str(nav.tree.line_count)))
        ln_style = theme.line_number or "dim"

        rows_used = 0
        for i, record in enumerate(nav.visible_lines()):
            virtual_line = first + i
            has_cursor = virtual_line == cursor
            # relative numbers, with the real line number on the cursor row
            if has_cursor:
                num = virtual_to_real[virtual_line] + 1
                result_append(f"{num:<{ln_width}} ", style=f"bold {ln_style}")
            else:
                num = abs(virtual_line - cursor)
                result_append(f"{num:>{ln_width}} ", style=ln_style)
            result.append_text(render_line(record, has_cursor, theme))
            result_append("\n")
            rows_used += 1

        # Fill remaining rows with ~
        while rows_used < content_height:
            result_append(f"{'~':>{ln_width}}\n", style="dim blue")
            rows_used += 1

        # status bar
        mode = self._mode
        mode_label = f" {mode.name} "
        result_append(mode_label, style=self._MODE_STYLE[mode])

        pending = self.pending or nav.repeat_buffer
        if pending:
            result_append(f"  {pending}", style="bold yellow")

        status_msg = self.status_msg
        pos = f" Ln {cursor + 1}/{nav.line_count} "
        spacer_len = max(
            0, width - len(mode_label) - len(pending) - len(pos) - len(status_msg) - 4
        )
        status_style = "bold red" if mode == ViewerMode.ERROR else theme.status_bar
        result_append(f"  {status_msg}", style=status_style or None)
        if spacer_len:
            result_append(" " * spacer_len)
        result_append(pos, style="bold")

        if mode == ViewerMode.COMMAND:
            result_append(f"\n:{self.command_buffer}", style="bold yellow")
            result_append(" ", style="reverse")
        elif mode == ViewerMode.SEARCH:
            result_append(f"\n/{self._search_buffer}", style="bold magenta")
            result_append(" ", style="reverse")
        else:
            result_append("\n")

        return result

    # =====================================================================
    # Key handling
    # =====================================================================

    def on_key(self, event: events.Key) -> None:
        event.prevent_default()
        event.stop()

        if self._mode == ViewerMode.NORMAL:
            self._handle_normal(event)
        elif self._mode == ViewerMode.COMMAND:
            self._handle_command(event)
        elif self._mode == ViewerMode.SEARCH:
            self._handle_search(event)
        elif self._mode == ViewerMode.ERROR:
            self._handle_error(event)

        self.refresh()

    # -- NORMAL ------------------------------------------------------------

    def _handle_normal(self, event: events.Key) -> None:
        key = event.key
        char = event.character or ""
        nav = self.nav

        if self.pending:
            self._handle_pending(char, key)
            return

        # repeat count
        if char.isdigit() and char.isascii():
            nav.push_digit(char)
            return

        # movement
        if char == "j" or key == "down":
            nav.move_down()
            self.status_msg = nav.current_path_label
        elif char == "k" or key == "up":
            nav.move_up()
            self.status_msg = nav.current_path_label
        elif char == "g" or key == "home":
            nav.move_to_top()
            self.status_msg = nav.current_path_label
        elif char == "G" or key == "end":
            nav.move_to_bottom()
            self.status_msg = nav.current_path_label
        elif key == "pagedown" or key == "ctrl+f":
            nav.move_down(self._visible_height())
            self.status_msg = nav.current_path_label
        elif key == "pageup" or key == "ctrl+b":
            nav.move_up(self._visible_height())
            self.status_msg = nav.current_path_label
        elif key == "ctrl+d":
            nav.move_down(max(1, self._visible_height() // 2))
            self.status_msg = nav.current_path_label
        elif key == "ctrl+u":
            nav.move_up(max(1, self._visible_height() // 2))
            self.status_msg = nav.current_path_label
        elif char == "{":
            nav.move_to_sibling(-1)
            self.status_msg = nav.current_path_label
        elif char == "}":
            nav.move_to_sibling(1)
            self.status_msg = nav.current_path_label

        # folding
        elif char == "h" or key == "left":
            self._fold_at_cursor(expand=False)
        elif char == "l" or key == "right":
            self._fold_at_cursor(expand=True)
        elif char == "z":
            self.pending = char

        # search mode
        elif char == "/":
            self._mode = ViewerMode.SEARCH
            self._search_buffer = ""
            self.status_msg = ""
        elif char == "n":
            self._goto_next_match()
        elif char == "N":
            self._goto_prev_match()

        # command mode
        elif char == ":":
            self._mode = ViewerMode.COMMAND
            self.command_buffer = ""
            self.status_msg = ""

        elif key == "escape":
            nav.repeat_buffer = ""
            self.status_msg = nav.current_path_label

    # -- Pending multi-char ------------------------------------------------

    def _handle_pending(self, char: str, key: str) -> None:
        if key == "escape" or not char:
            self.pending = ""
            self.status_msg = ""
            return

        combo = self.pending + char
        self.pending = ""

        if combo == "za":
            self._toggle_fold()
        elif combo == "zc":
            self._fold_at_cursor(expand=False)
        elif combo == "zo":
            self._fold_at_cursor(expand=True)
        elif combo == "zM":
            self._fold_all()
        elif combo == "zR":
            self._unfold_all()
        else:
            self.status_msg = f"unknown: {combo}"

    # -- COMMAND -----------------------------------------------------------

    def _handle_command(self, event: events.Key) -> None:
        key = event.key
        char = event.character
        history = self._command_history

        if key == "escape":
            self._mode = ViewerMode.NORMAL
            self.command_buffer = ""
            history.reset()
            self.status_msg = self.nav.current_path_label
            return

        if key == "enter":
            cmd = self.command_buffer.strip()
            history.add(cmd)
            self._exec_command(cmd)
            if self._mode == ViewerMode.COMMAND:
                self._mode = ViewerMode.NORMAL
            self.command_buffer = ""
            return

        if key == "backspace":
            if self.command_buffer:
                self.command_buffer = self.command_buffer[:-1]
            else:
                self._mode = ViewerMode.NORMAL
            history.reset()
            return

        if key in ("up", "down"):
            recalled = history.older() if key == "up" else history.newer()
            if recalled is not None:
                self.command_buffer = recalled
            return

        if char and char.isprintable():
            self.command_buffer += char
            history.reset()

    def _exec_command(self, cmd: str) -> None:
        nav = self.nav

        if cmd == "q":
            self.post_message(self.Quit())
            return

        # :.users[0].email → jump to path
        if cmd.startswith("."):
            path = cmd[1:]
            status = nav.go_to_path(path)
            if status.ok:
                self.status_msg = nav.current_path_label
            else:
                self._mode = ViewerMode.ERROR
                self.status_msg = describe(status, path)
            return

        if cmd == "$":
            nav.move_to_bottom()
            self.status_msg = nav.current_path_label
            return

        # :<num> → virtual line (1-based)
        if cmd.isascii() and cmd.isdigit():
            nav.move_to_line(int(cmd) - 1)
            self.status_msg = nav.current_path_label
            return

        self._mode = ViewerMode.ERROR
        self.status_msg = describe(Status.UNKNOWN_COMMAND, cmd)

    # -- ERROR -------------------------------------------------------------

    def _handle_error(self, event: events.Key) -> None:
        key = event.key
        char = event.character

        if key == "escape":
            self._mode = ViewerMode.NORMAL
            self.command_buffer = ""
            self.status_msg = self.nav.current_path_label
        elif key == "enter" or char == ":":
            self._mode = ViewerMode.COMMAND
            self.command_buffer = ""
            self.status_msg = ""
