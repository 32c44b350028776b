"""Result codes returned by the navigator, and their status-line text."""

from __future__ import annotations

from enum import Enum, auto


class Status(Enum):
    OK = auto()
    NOT_FOUND = auto()  # path absent from the tree
    NOT_VISIBLE = auto()  # path hidden behind a folded ancestor
    NO_MATCHES = auto()  # search found nothing / nothing to step through
    UNKNOWN_COMMAND = auto()

    @property
    def ok(self) -> bool:
        return self is Status.OK


def describe(status: Status, detail: str = "") -> str:
    """Status-line message for *status*; *detail* is the path, term or command."""
    if status is Status.NOT_FOUND:
        return f"Error: Path not found: .{detail}"
    if status is Status.NOT_VISIBLE:
        return f"Error: Path not visible (may be collapsed): .{detail}"
    if status is Status.NO_MATCHES:
        if not detail:
            return "No previous search"
        return f"Pattern not found: {detail}"
    if status is Status.UNKNOWN_COMMAND:
        return f"Error: Unknown command: {detail}"
    return detail
