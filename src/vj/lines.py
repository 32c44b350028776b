"""Projection of a ValueTree into displayable line records."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum

from vj._fold import CollapseState
from vj.tree import Node, NodeType, ValueTree

logger = logging.getLogger(__name__)


class LineKind(Enum):
    OPEN_BRACKET = "open_bracket"  # root container
    OPEN_WITH_KEY = "open_with_key"  # member / element container
    CLOSE_BRACKET = "close_bracket"
    CONTENT = "content"  # primitive value


_CLOSING = {"{": "}", "[": "]"}


@dataclass(frozen=True)
class LineRecord:
    """Everything a renderer needs to draw one row."""

    kind: LineKind
    node_path: str
    node_type: NodeType
    real_line: int
    indent: int
    key: str = ""
    value_text: str = ""
    raw_text: str = ""  # unescaped value, matched by search
    bracket: str = ""
    is_collapsed: bool = False
    has_children: bool = False
    is_array_element: bool = False
    is_last_child: bool = True
    child_count: int = 0


@dataclass
class Projection:
    lines: list[LineRecord] = field(default_factory=list)
    virtual_to_real: list[int] = field(default_factory=list)
    real_to_virtual: dict[int, int] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.lines)

    def virtual_line_of(self, real_line: int) -> int | None:
        return self.real_to_virtual.get(real_line)

    def append(self, record: LineRecord) -> None:
        self.real_to_virtual[record.real_line] = len(self.lines)
        self.lines.append(record)
        self.virtual_to_real.append(record.real_line)


def value_text(node: Node) -> str:
    """Text of a primitive value as it appears on its line."""
    if node.type is NodeType.STRING:
        return json.dumps(node.value, ensure_ascii=False)[1:-1]
    if node.type is NodeType.NUMBER:
        return json.dumps(node.value)
    if node.type is NodeType.BOOLEAN:
        return "true" if node.value else "false"
    if node.type is NodeType.NULL:
        return "null"
    return ""


def project(tree: ValueTree, collapsed: CollapseState) -> Projection:
    """Walk *tree* depth-first and emit one record per visible row.

    The result depends only on *tree* and *collapsed*; it is rebuilt from
    scratch after every fold edit instead of being patched.
    """
    projection = Projection()
    _walk(tree, tree.root, collapsed, projection, True)
    logger.debug(
        "projected %d of %d lines (%d folds)",
        len(projection),
        tree.line_count,
        len(collapsed),
    )
    return projection


def _walk(
    tree: ValueTree,
    node: Node,
    collapsed: CollapseState,
    out: Projection,
    is_last: bool,
) -> None:
    key = node.key or ""
    if not node.is_composite:
        text = value_text(node)
        out.append(
            LineRecord(
                kind=LineKind.CONTENT,
                node_path=node.path,
                node_type=node.type,
                real_line=node.line,
                indent=node.depth,
                key=key,
                value_text=text,
                raw_text=node.value if node.type is NodeType.STRING else text,
                is_array_element=node.is_array_element,
                is_last_child=is_last,
            )
        )
        return

    children = tree.get_children(node.path)
    is_collapsed = collapsed.is_collapsed(node.path)
    out.append(
        LineRecord(
            kind=LineKind.OPEN_BRACKET if node.is_root else LineKind.OPEN_WITH_KEY,
            node_path=node.path,
            node_type=node.type,
            real_line=node.line,
            indent=node.depth,
            key=key,
            bracket=node.bracket,
            is_collapsed=is_collapsed,
            has_children=bool(children),
            is_array_element=node.is_array_element,
            is_last_child=is_last,
            child_count=len(children),
        )
    )
    if is_collapsed:
        return

    last = len(children) - 1
    for i, child_path in enumerate(children):
        _walk(tree, tree.get_node(child_path), collapsed, out, i == last)

    out.append(
        LineRecord(
            kind=LineKind.CLOSE_BRACKET,
            node_path=node.path,
            node_type=node.type,
            real_line=node.closing_line,
            indent=node.depth,
            bracket=_CLOSING[node.bracket],
            is_array_element=node.is_array_element,
            is_last_child=is_last,
        )
    )
