from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator, Optional, Union

from relaxavl.algo.search import FindMode, find_node, node_first, node_last, node_next, node_prev
from relaxavl.core.diagnostics import StatusCode, StatusReporter
from relaxavl.core.node import AVLNode

if TYPE_CHECKING:  # pragma: no cover
    from relaxavl.core.tree import RelaxedAVLTree


class TreeCursor(StatusReporter):
    """Movable position in a tree's in-order sequence.

    The cursor only observes the tree: it walks parent/child links and keeps
    no stack. Clearing the tree, or deleting the node under the cursor,
    leaves the cursor unpositioned.
    """

    def __init__(self, tree: "RelaxedAVLTree", *, debug: Optional[bool] = None) -> None:
        super().__init__(
            tree.callbacks,
            debug=tree.debug if debug is None else bool(debug),
            messages=tree.messages,
            fatal_severity=tree.fatal_severity,
        )
        self._tree = tree
        self._node: Optional[AVLNode] = None
        self._epoch = tree.epoch

    def __iter__(self) -> Iterator[Any]:
        """Yield payloads from the current position (or the first) onwards."""
        payload = self.curr()
        if payload is None:
            payload = self.first()
        while payload is not None:
            yield payload
            payload = self.next()

    @property
    def tree(self) -> "RelaxedAVLTree":
        return self._tree

    def _position(self) -> Optional[AVLNode]:
        node = self._node
        if node is None:
            return None
        if self._epoch != self._tree.epoch or node.payload is None:
            self._node = None
            return None
        return node

    def _move(self, node: Optional[AVLNode]) -> Any:
        self._node = node
        self._epoch = self._tree.epoch
        return node.payload if node is not None else None

    def first(self) -> Any:
        self.reset_status()
        return self._move(node_first(self._tree, reporter=self))

    def last(self) -> Any:
        self.reset_status()
        return self._move(node_last(self._tree, reporter=self))

    def next(self) -> Any:
        self.reset_status()
        return self._move(node_next(self._tree, self._position(), reporter=self))

    def prev(self) -> Any:
        self.reset_status()
        return self._move(node_prev(self._tree, self._position(), reporter=self))

    def curr(self) -> Any:
        self.reset_status()
        node = self._position()
        return node.payload if node is not None else None

    def find(self, payload: Any, mode: Union[FindMode, str] = FindMode.EXACT) -> Any:
        self.reset_status()
        if not self.check_payload(payload, "find"):
            return None
        if self._tree.root is None:
            self._node = None
            self.report(StatusCode.EMPTY_TREE)
            return None
        result = find_node(self._tree, payload, FindMode(mode), reporter=self)
        return self._move(result.node)


__all__ = ["TreeCursor"]
