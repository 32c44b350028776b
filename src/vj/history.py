"""Recall list for the command and search input lines."""

from __future__ import annotations


class InputHistory:
    """Most-recent-first list of submitted inputs with up/down recall.

    ``index`` is -1 while the user is typing a fresh line; ``older`` and
    ``newer`` walk away from and back toward it.
    """

    def __init__(self, limit: int = 50) -> None:
        self.entries: list[str] = []
        self.index: int = -1
        self.limit: int = limit

    def add(self, text: str) -> None:
        """Record *text*, moving a repeated entry to the front."""
        self.index = -1
        if not text:
            return
        if text in self.entries:
            self.entries.remove(text)
        self.entries.insert(0, text)
        del self.entries[self.limit :]

    def reset(self) -> None:
        self.index = -1

    def older(self) -> str | None:
        """Step back one entry; None when there is nothing older."""
        if self.index >= len(self.entries) - 1:
            return None
        self.index += 1
        return self.entries[self.index]

    def newer(self) -> str | None:
        """Step forward one entry; "" on reaching the fresh line, None past it."""
        if self.index < 0:
            return None
        self.index -= 1
        if self.index < 0:
            return ""
        return self.entries[self.index]

    def __len__(self) -> int:
        return len(self.entries)
