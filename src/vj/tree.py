"""Addressable node graph built from a decoded JSON value."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)

ROOT_PATH = ""

# Keys containing these characters are written as ["..."] so paths stay unique.
_PATH_SPECIAL = frozenset('.[]"')


class NodeType(Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    OBJECT = "object"
    ARRAY = "array"

    @property
    def is_composite(self) -> bool:
        return self in (NodeType.OBJECT, NodeType.ARRAY)


def node_type_of(value: object) -> NodeType:
    """Classify a decoded JSON value."""
    if value is None:
        return NodeType.NULL
    # bool is a subclass of int, so it has to be checked first
    if isinstance(value, bool):
        return NodeType.BOOLEAN
    if isinstance(value, (int, float)):
        return NodeType.NUMBER
    if isinstance(value, str):
        return NodeType.STRING
    if isinstance(value, dict):
        return NodeType.OBJECT
    if isinstance(value, (list, tuple)):
        return NodeType.ARRAY
    raise TypeError(f"not a JSON value: {type(value).__name__}")


def member_path(parent: str, key: str) -> str:
    """Path of object member *key* under *parent*."""
    if not key or any(ch in _PATH_SPECIAL for ch in key):
        return f"{parent}[{json.dumps(key, ensure_ascii=False)}]"
    if parent == ROOT_PATH:
        return key
    return f"{parent}.{key}"


def element_path(parent: str, index: int) -> str:
    """Path of array element *index* under *parent*."""
    return f"{parent}[{index}]"


@dataclass(frozen=True)
class Node:
    path: str
    type: NodeType
    value: object
    parent: str | None  # None only for the root
    depth: int
    line: int  # real line of the opening token (or of the leaf)
    closing_line: int = -1  # composites only
    key: str | None = None  # object members only
    index: int | None = None  # array elements only
    children: tuple[str, ...] = field(default=(), repr=False)

    @property
    def is_composite(self) -> bool:
        return self.type.is_composite

    @property
    def is_array_element(self) -> bool:
        return self.index is not None

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def bracket(self) -> str:
        """Opening bracket for composites, empty for leaves."""
        if self.type is NodeType.OBJECT:
            return "{"
        if self.type is NodeType.ARRAY:
            return "["
        return ""


class ValueTree:
    """Immutable tree over a decoded JSON value.

    Every node gets a permanent *real line*: the line its opening token
    (or its only token, for leaves) would occupy in the fully expanded,
    pretty-printed document.  Composites also get a closing line.
    Lookups by path, by real line and by parent are all dictionary hits.
    """

    def __init__(self) -> None:
        self._nodes: dict[str, Node] = {}
        self._lines: dict[int, Node] = {}
        self._children: dict[str, tuple[str, ...]] = {}
        self._line_count: int = 0

    # -- Construction ------------------------------------------------------

    @classmethod
    def build(cls, value: object) -> ValueTree:
        tree = cls()
        tree._line_count = tree._add(value, ROOT_PATH, None, 0, 0, None, None)
        logger.debug(
            "built tree: %d nodes, %d lines", len(tree._nodes), tree._line_count
        )
        return tree

    def _add(
        self,
        value: object,
        path: str,
        parent: str | None,
        depth: int,
        line: int,
        key: str | None,
        index: int | None,
    ) -> int:
        """Add the subtree rooted at *value*; return the next free line."""
        node_type = node_type_of(value)
        if not node_type.is_composite:
            node = Node(path, node_type, value, parent, depth, line, key=key, index=index)
            self._register(node)
            return line + 1

        child_paths: list[str] = []
        next_line = line + 1
        if node_type is NodeType.OBJECT:
            for child_key, child_value in value.items():
                child = member_path(path, child_key)
                child_paths.append(child)
                next_line = self._add(
                    child_value, child, path, depth + 1, next_line, child_key, None
                )
        else:
            for i, child_value in enumerate(value):
                child = element_path(path, i)
                child_paths.append(child)
                next_line = self._add(
                    child_value, child, path, depth + 1, next_line, None, i
                )

        node = Node(
            path,
            node_type,
            value,
            parent,
            depth,
            line,
            closing_line=next_line,
            key=key,
            index=index,
            children=tuple(child_paths),
        )
        self._register(node)
        self._lines[next_line] = node
        return next_line + 1

    def _register(self, node: Node) -> None:
        self._nodes[node.path] = node
        self._lines[node.line] = node
        self._children[node.path] = node.children

    # -- Lookups -----------------------------------------------------------

    @property
    def root(self) -> Node:
        return self._nodes[ROOT_PATH]

    @property
    def line_count(self) -> int:
        """Number of real lines in the fully expanded document."""
        return self._line_count

    def get_node(self, path: str) -> Node | None:
        return self._nodes.get(path)

    def get_node_at_line(self, line: int) -> Node | None:
        """Node whose opening or closing token sits on real *line*."""
        return self._lines.get(line)

    def get_children(self, path: str) -> tuple[str, ...]:
        return self._children.get(path, ())

    def has_children(self, path: str) -> bool:
        return bool(self._children.get(path))

    def get_value(self, path: str) -> object:
        node = self._nodes.get(path)
        return node.value if node is not None else None

    def paths(self) -> list[str]:
        """All paths in pre-order."""
        return [self._lines[i].path for i in sorted(self._lines) if self._lines[i].line == i]

    def __contains__(self, path: object) -> bool:
        return path in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)
