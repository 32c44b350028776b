"""Collapse state and the fold mixin for JsonViewer."""

from __future__ import annotations

from collections.abc import Iterator


class CollapseState:
    """Set of folded node paths.

    Folding a path leaves the flags of its descendants alone, so unfolding
    it later brings back whatever was folded underneath.  Paths are not
    validated: an unknown path simply never matches during projection.
    """

    def __init__(self, paths: tuple[str, ...] | list[str] = ()) -> None:
        self._paths: set[str] = set(paths)

    def collapse(self, path: str) -> None:
        self._paths.add(path)

    def expand(self, path: str) -> None:
        self._paths.discard(path)

    def is_collapsed(self, path: str) -> bool:
        return path in self._paths

    def toggle(self, path: str) -> bool:
        """Flip *path*; return True if it is now collapsed."""
        if path in self._paths:
            self._paths.discard(path)
            return False
        self._paths.add(path)
        return True

    def clear(self) -> None:
        self._paths.clear()

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._paths))

    def __len__(self) -> int:
        return len(self._paths)

    def __repr__(self) -> str:
        return f"CollapseState({sorted(self._paths)!r})"


class FoldMixin:
    """Fold related key commands for JsonViewer."""

    def _fold_at_cursor(self, expand: bool) -> None:
        """h / l: fold or unfold the node under the cursor."""
        node = self.nav.current_node
        if node is None:
            return
        if not node.is_composite:
            self.status_msg = self.nav.current_path_label
            return
        self.nav.toggle_fold(expand)
        self.status_msg = self.nav.current_path_label

    def _toggle_fold(self) -> None:
        """za: fold toggle."""
        node = self.nav.current_node
        if node is None or not node.is_composite:
            return
        self.nav.toggle_fold(self.nav.collapsed.is_collapsed(node.path))
        self.status_msg = self.nav.current_path_label

    def _fold_all(self) -> None:
        """zM: fold every container below the root."""
        count = self.nav.fold_all()
        self.status_msg = f"{count} folded"

    def _unfold_all(self) -> None:
        """zR: drop every fold."""
        self.nav.unfold_all()
        self.status_msg = ""
