"""Substring search over a projection, and the search mixin for JsonViewer."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from vj.lines import LineKind, LineRecord
from vj.status import Status, describe

logger = logging.getLogger(__name__)


class MatchType(Enum):
    KEY = "key"
    VALUE = "value"


@dataclass(frozen=True)
class SearchMatch:
    virtual_line: int
    path: str
    match_type: MatchType
    content: str


class SearchIndex:
    """Ordered matches of one term against one projection snapshot.

    Any fold edit changes virtual line numbers, so the owner must call
    :meth:`build` again before stepping through matches.
    """

    def __init__(self) -> None:
        self.term: str = ""
        self.matches: list[SearchMatch] = []
        self.current: int = -1

    def build(self, lines: Sequence[LineRecord], term: str) -> list[SearchMatch]:
        """Case-insensitive scan of keys, and of leaf values as decoded."""
        self.term = term
        self.matches = []
        self.current = -1
        if not term:
            return self.matches
        needle = term.lower()
        for virtual_line, record in enumerate(lines):
            if record.key and needle in record.key.lower():
                self.matches.append(
                    SearchMatch(virtual_line, record.node_path, MatchType.KEY, record.key)
                )
            # containers are never searched as a blob
            if record.kind is LineKind.CONTENT and needle in record.raw_text.lower():
                self.matches.append(
                    SearchMatch(
                        virtual_line,
                        record.node_path,
                        MatchType.VALUE,
                        record.raw_text,
                    )
                )
        logger.debug("search %r: %d matches", term, len(self.matches))
        return self.matches

    def clear(self) -> None:
        self.term = ""
        self.matches = []
        self.current = -1

    def activate(self, cursor: int) -> SearchMatch | None:
        """Select the first match at or after *cursor*, wrapping to the first."""
        if not self.matches:
            self.current = -1
            return None
        self.current = 0
        for i, match in enumerate(self.matches):
            if match.virtual_line >= cursor:
                self.current = i
                break
        return self.matches[self.current]

    def next(self, cursor: int) -> SearchMatch | None:
        if not self.matches:
            return None
        self.current = 0
        for i, match in enumerate(self.matches):
            if match.virtual_line > cursor:
                self.current = i
                break
        return self.matches[self.current]

    def previous(self, cursor: int) -> SearchMatch | None:
        if not self.matches:
            return None
        self.current = len(self.matches) - 1
        for i in range(len(self.matches) - 1, -1, -1):
            if self.matches[i].virtual_line < cursor:
                self.current = i
                break
        return self.matches[self.current]

    def status_text(self) -> str:
        if not self.matches:
            return describe(Status.NO_MATCHES, self.term)
        return f"/{self.term} [{self.current + 1}/{len(self.matches)}]"

    def __len__(self) -> int:
        return len(self.matches)


class SearchMixin:
    """Search-mode key handling for JsonViewer."""

    def _handle_search(self, event) -> None:
        from vj.widget import ViewerMode

        key = event.key
        char = event.character
        history = self._search_history

        if key == "escape":
            self._mode = ViewerMode.NORMAL
            self._search_buffer = ""
            history.reset()
            self.nav.clear_search()
            self.status_msg = self.nav.current_path_label
            return

        if key == "enter":
            if self._search_buffer:
                history.add(self._search_buffer)
                self._execute_search()
            self._mode = ViewerMode.NORMAL
            history.reset()
            return

        if key == "backspace":
            if self._search_buffer:
                self._search_buffer = self._search_buffer[:-1]
            else:
                self._mode = ViewerMode.NORMAL
            history.reset()
            return

        if key in ("up", "down"):
            recalled = history.older() if key == "up" else history.newer()
            if recalled is not None:
                self._search_buffer = recalled
            return

        if char and char.isprintable():
            self._search_buffer += char
            history.reset()

    def _execute_search(self) -> None:
        status = self.nav.search(self._search_buffer)
        if status.ok:
            self.status_msg = self.nav.search_status()
        else:
            self.status_msg = describe(status, self._search_buffer)

    def _goto_next_match(self) -> None:
        status = self.nav.next_match()
        if status.ok:
            self.status_msg = self.nav.search_status()
        else:
            self.status_msg = describe(status, self.nav.search_index.term)

    def _goto_prev_match(self) -> None:
        status = self.nav.previous_match()
        if status.ok:
            self.status_msg = self.nav.search_status()
        else:
            self.status_msg = describe(status, self.nav.search_index.term)
