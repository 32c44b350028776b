"""Turn line records into plain or styled text."""

from __future__ import annotations

import json
from dataclasses import dataclass

from rich.text import Text

from vj.lines import LineKind, LineRecord
from vj.tree import NodeType

INDENT = "  "


@dataclass(frozen=True)
class Theme:
    """Rich style strings for each syntax element; empty means unstyled."""

    name: str
    cursor: str = ""
    status_bar: str = ""
    key: str = ""
    string: str = ""
    null: str = ""
    boolean: str = ""
    number: str = ""
    line_number: str = ""
    punctuation: str = ""
    hint: str = "dim italic"


THEMES: dict[str, Theme] = {
    "nocolor": Theme("nocolor", hint=""),
    "dark": Theme(
        "dark",
        cursor="#bb9af7",
        status_bar="color(5)",
        key="#7dcfff",
        string="#9ece6a",
        null="#565f89",
        boolean="#ff9e64",
        number="#ff9e64",
        line_number="#565f89",
    ),
    "light": Theme(
        "light",
        cursor="#0066cc",
        status_bar="color(4)",
        key="#0066cc",
        string="#22863a",
        null="#6f42c1",
        boolean="#d73a49",
        number="#005cc5",
        line_number="#586069",
    ),
}

DEFAULT_THEME = "dark"


def _value_style(node_type: NodeType, theme: Theme) -> str:
    return {
        NodeType.STRING: theme.string,
        NodeType.NUMBER: theme.number,
        NodeType.BOOLEAN: theme.boolean,
        NodeType.NULL: theme.null,
    }.get(node_type, "")


def _segments(record: LineRecord, theme: Theme) -> list[tuple[str, str]]:
    """Split a record into (text, style) pieces, without indentation."""
    comma = "" if record.is_last_child else ","
    punct = theme.punctuation
    segs: list[tuple[str, str]] = []

    if record.kind is LineKind.CLOSE_BRACKET:
        return [(record.bracket + comma, punct)]

    if record.key and not record.is_array_element:
        quoted = json.dumps(record.key, ensure_ascii=False)
        segs.append(('"', punct))
        segs.append((quoted[1:-1], theme.key))
        segs.append(('": ', punct))

    if record.kind is LineKind.CONTENT:
        text = record.value_text
        if record.node_type is NodeType.STRING:
            text = f'"{text}"'
        segs.append((text, _value_style(record.node_type, theme)))
        if comma:
            segs.append((comma, punct))
        return segs

    # container opening or folded summary
    if record.is_collapsed:
        close = "}" if record.bracket == "{" else "]"
        segs.append((record.bracket + "..." + close + comma, punct))
    else:
        segs.append((record.bracket, punct))
    return segs


def line_text(record: LineRecord, indent: str = INDENT) -> str:
    """Plain rendering of one record, e.g. ``  "b": [...]``."""
    body = "".join(text for text, _ in _segments(record, THEMES["nocolor"]))
    return indent * record.indent + body


def render_line(record: LineRecord, has_cursor: bool, theme: Theme) -> Text:
    """Styled rendering of one record.

    The cursor is drawn as a reversed first glyph.  Folded containers get
    a dim hint with their child count.
    """
    result = Text(INDENT * record.indent)
    segs = _segments(record, theme)
    if has_cursor and segs:
        first, style = segs[0]
        result.append(first[0], style=f"reverse {theme.cursor}".strip())
        segs[0] = (first[1:], style)
    for text, style in segs:
        if text:
            result.append(text, style=style or None)
    if record.is_collapsed and record.kind is not LineKind.CONTENT:
        unit = "items" if record.child_count != 1 else "item"
        result.append(f"  // {record.child_count} {unit}", style=theme.hint or None)
    return result
