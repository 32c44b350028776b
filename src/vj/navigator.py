"""Cursor, folding and path jumps over a projected ValueTree."""

from __future__ import annotations

import logging

from vj._fold import CollapseState
from vj._search import SearchIndex
from vj.lines import LineRecord, Projection, project
from vj.status import Status
from vj.tree import Node, ValueTree
from vj.viewport import DEFAULT_MARGIN, Viewport

logger = logging.getLogger(__name__)


class Navigator:
    """One viewing session over a document.

    Owns the tree, the fold set, the current projection, the viewport and
    the search index, and keeps them in step.  The cursor is a virtual
    line index; after a fold edit it keeps its index (clamped) rather
    than following the node it was on.
    """

    def __init__(
        self,
        tree: ValueTree,
        *,
        height: int = 24,
        margin: int = DEFAULT_MARGIN,
    ) -> None:
        self.tree: ValueTree = tree
        self.collapsed: CollapseState = CollapseState()
        self.viewport: Viewport = Viewport(height, margin)
        self.search_index: SearchIndex = SearchIndex()
        self.cursor: int = 0
        self.repeat_buffer: str = ""
        self.projection: Projection = project(tree, self.collapsed)

    @classmethod
    def from_value(cls, value: object, **kwargs) -> Navigator:
        return cls(ValueTree.build(value), **kwargs)

    # -- State -------------------------------------------------------------

    @property
    def lines(self) -> list[LineRecord]:
        return self.projection.lines

    @property
    def virtual_to_real(self) -> list[int]:
        return self.projection.virtual_to_real

    @property
    def line_count(self) -> int:
        return len(self.projection)

    @property
    def current_node(self) -> Node | None:
        if not self.projection.lines:
            return None
        return self.tree.get_node_at_line(self.projection.virtual_to_real[self.cursor])

    @property
    def current_path(self) -> str:
        node = self.current_node
        return node.path if node is not None else ""

    @property
    def current_path_label(self) -> str:
        """Path under the cursor as typed in command mode (leading dot)."""
        node = self.current_node
        return "." + node.path if node is not None else ""

    def visible_lines(self) -> list[LineRecord]:
        return self.viewport.slice(self.projection.lines)

    def resize(self, height: int) -> None:
        self.viewport.resize(height, self.cursor)

    def _clamp_cursor(self) -> None:
        self.cursor = max(0, min(self.cursor, self.line_count - 1))

    def _reproject(self) -> None:
        self.projection = project(self.tree, self.collapsed)
        self._clamp_cursor()
        self.viewport.clamp(self.line_count)
        self.viewport.follow(self.cursor)
        if self.search_index.term:
            self.search_index.build(self.projection.lines, self.search_index.term)

    # -- Repeat count ------------------------------------------------------

    def push_digit(self, digit: str) -> None:
        """Append one digit to the pending repeat count (vi ``5j``)."""
        if len(digit) != 1 or digit not in "0123456789":
            raise ValueError(f"repeat count takes digits only, got {digit!r}")
        self.repeat_buffer += digit

    def take_count(self) -> int:
        """Consume the pending repeat count; 1 when none is pending."""
        if not self.repeat_buffer:
            return 1
        count = int(self.repeat_buffer)
        self.repeat_buffer = ""
        return max(1, count)

    # -- Motions -----------------------------------------------------------

    def move_down(self, steps: int | None = None) -> None:
        if steps is None:
            steps = self.take_count()
        self.cursor = min(self.cursor + steps, self.line_count - 1)
        self.viewport.scroll_down(self.cursor)

    def move_up(self, steps: int | None = None) -> None:
        if steps is None:
            steps = self.take_count()
        self.cursor = max(0, self.cursor - steps)
        self.viewport.scroll_up(self.cursor)

    def move_to_top(self) -> None:
        self.repeat_buffer = ""
        self.cursor = 0
        self.viewport.scroll_up(self.cursor)

    def move_to_bottom(self) -> None:
        self.repeat_buffer = ""
        self.cursor = max(0, self.line_count - 1)
        self.viewport.scroll_down(self.cursor)

    def move_to_line(self, virtual_line: int) -> None:
        self.cursor = virtual_line
        self._clamp_cursor()
        self.viewport.follow(self.cursor)

    def _is_visible(self, path: str) -> bool:
        node = self.tree.get_node(path)
        return node is not None and node.line in self.projection.real_to_virtual

    def visible_siblings(self) -> list[str]:
        """Siblings of the node under the cursor that are in the projection."""
        node = self.current_node
        if node is None or node.parent is None:
            return []
        return [p for p in self.tree.get_children(node.parent) if self._is_visible(p)]

    def move_to_sibling(self, direction: int) -> bool:
        """Step to the next (1) or previous (-1) visible sibling.

        Returns False, leaving the cursor alone, when there is nowhere to go.
        """
        siblings = self.visible_siblings()
        if len(siblings) <= 1:
            return False
        try:
            index = siblings.index(self.current_path)
        except ValueError:
            return False
        target = index + direction
        if not 0 <= target < len(siblings):
            return False
        node = self.tree.get_node(siblings[target])
        virtual_line = self.projection.virtual_line_of(node.line)
        if virtual_line is None:
            return False
        self.cursor = virtual_line
        if direction > 0:
            self.viewport.scroll_down(self.cursor)
        else:
            self.viewport.scroll_up(self.cursor)
        return True

    def go_to_path(self, path: str) -> Status:
        node = self.tree.get_node(path)
        if node is None:
            logger.debug("go_to_path %r: not found", path)
            return Status.NOT_FOUND
        virtual_line = self.projection.virtual_line_of(node.line)
        if virtual_line is None:
            logger.debug("go_to_path %r: hidden by a fold", path)
            return Status.NOT_VISIBLE
        self.cursor = virtual_line
        self.viewport.follow(self.cursor)
        return Status.OK

    # -- Folding -----------------------------------------------------------

    def toggle_fold(self, expand: bool) -> None:
        """Fold (or unfold) the node under the cursor and re-project."""
        node = self.current_node
        if node is None:
            return
        if expand:
            self.collapsed.expand(node.path)
        else:
            self.collapsed.collapse(node.path)
        logger.debug("%s %r", "expand" if expand else "collapse", node.path)
        self._reproject()

    def fold_all(self) -> int:
        """Fold every container below the root; return how many."""
        count = 0
        for path in self.tree.paths():
            node = self.tree.get_node(path)
            if node.is_composite and not node.is_root and node.children:
                self.collapsed.collapse(path)
                count += 1
        self._reproject()
        return count

    def unfold_all(self) -> None:
        self.collapsed.clear()
        self._reproject()

    # -- Search ------------------------------------------------------------

    def search(self, term: str) -> Status:
        self.search_index.build(self.projection.lines, term)
        match = self.search_index.activate(self.cursor)
        if match is None:
            return Status.NO_MATCHES
        self.move_to_line(match.virtual_line)
        return Status.OK

    def next_match(self) -> Status:
        match = self.search_index.next(self.cursor)
        if match is None:
            return Status.NO_MATCHES
        self.move_to_line(match.virtual_line)
        return Status.OK

    def previous_match(self) -> Status:
        match = self.search_index.previous(self.cursor)
        if match is None:
            return Status.NO_MATCHES
        self.move_to_line(match.virtual_line)
        return Status.OK

    def search_status(self) -> str:
        return self.search_index.status_text()

    def clear_search(self) -> None:
        self.search_index.clear()
