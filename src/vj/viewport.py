"""Bounded window over the projected line sequence."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

DEFAULT_MARGIN = 3


def margin_for(height: int, margin: int = DEFAULT_MARGIN) -> int:
    """Scroll margin usable at *height*; 0 when the window is too short."""
    if height <= 2 * margin + 3:
        return 0
    return margin


class Viewport:
    """Which slice of the projection is on screen.

    The cursor is kept at least ``margin`` rows away from the top and
    bottom edges while scrolling, vim ``scrolloff`` style.
    """

    def __init__(self, height: int, margin: int = DEFAULT_MARGIN) -> None:
        self.first_visible_line: int = 0
        self.height: int = max(1, height)
        self.base_margin: int = margin
        self.margin: int = margin_for(self.height, margin)

    def slice(self, lines: Sequence[T]) -> list[T]:
        start = self.first_visible_line
        return list(lines[start : start + self.height])

    def scroll_down(self, cursor: int) -> None:
        if cursor - self.first_visible_line > self.height - 1 - self.margin:
            self.first_visible_line = cursor - self.height + 1 + self.margin

    def scroll_up(self, cursor: int) -> None:
        if cursor - self.first_visible_line < self.margin:
            self.first_visible_line = max(0, cursor - self.margin)

    def follow(self, cursor: int) -> None:
        """Scroll in whichever direction keeps *cursor* inside the margins."""
        self.scroll_down(cursor)
        self.scroll_up(cursor)

    def resize(self, height: int, cursor: int) -> None:
        self.height = max(1, height)
        self.margin = margin_for(self.height, self.base_margin)
        # +3 keeps the cursor off the last rows after the window shrinks
        if cursor + 3 >= self.first_visible_line + self.height:
            self.first_visible_line = max(0, cursor - self.height + 1)

    def clamp(self, line_count: int) -> None:
        """Pull the window back inside a projection of *line_count* lines."""
        last = max(0, line_count - 1)
        self.first_visible_line = max(0, min(self.first_visible_line, last))

    def row_of(self, virtual_line: int) -> int | None:
        """Screen row of *virtual_line*, or None when it is off screen."""
        row = virtual_line - self.first_visible_line
        if 0 <= row < self.height:
            return row
        return None
