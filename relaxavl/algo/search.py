from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from relaxavl.core.diagnostics import StatusCode, StatusReporter
from relaxavl.core.node import LEFT, RIGHT, AVLNode

if TYPE_CHECKING:  # pragma: no cover
    from relaxavl.core.tree import RelaxedAVLTree


class FindMode(Enum):
    EXACT = "exact"
    PREV = "prev"
    NEXT = "next"


@dataclass(frozen=True)
class SearchResult:
    """Outcome of a downward search.

    ``parent`` is the node above ``node`` on an exact match, or the would-be
    parent of the searched payload otherwise; ``direction`` is the last step
    taken from it. ``pivot`` is the deepest node on the path whose balance
    sits at the tolerance edge.
    """

    node: Optional[AVLNode]
    parent: Optional[AVLNode]
    direction: Optional[int]
    pivot: Optional[AVLNode]


def find_node(
    tree: "RelaxedAVLTree",
    payload: Any,
    mode: FindMode = FindMode.EXACT,
    *,
    reporter: StatusReporter,
) -> SearchResult:
    """Walk down from the root looking for ``payload``."""

    compare = tree.callbacks.compare
    balance_factor = tree.balance_factor
    pivot = tree.root
    parent: Optional[AVLNode] = None
    direction: Optional[int] = None
    node = tree.root
    while node is not None:
        cmp = compare(payload, node.payload)
        if cmp == 0:
            if reporter.debug:
                reporter.report(StatusCode.FOUND, {"node": reporter.dump(node.payload)})
            return SearchResult(node=node, parent=parent, direction=direction, pivot=pivot)
        direction = RIGHT if cmp > 0 else LEFT
        if abs(node.balance()) == balance_factor:
            pivot = node
        parent = node
        node = node.child(direction)

    if mode is FindMode.EXACT:
        if reporter.debug:
            reporter.report(StatusCode.NOT_FOUND, {"node": reporter.dump(payload)})
        match = None
    elif mode is FindMode.PREV:
        match = node_prev(tree, parent, reporter=reporter) if direction == LEFT else parent
        if reporter.debug:
            _report_closest(reporter, payload, match, StatusCode.PREV_FOUND, StatusCode.PREV_NOT_FOUND)
    else:
        match = node_next(tree, parent, reporter=reporter) if direction == RIGHT else parent
        if reporter.debug:
            _report_closest(reporter, payload, match, StatusCode.NEXT_FOUND, StatusCode.NEXT_NOT_FOUND)
    return SearchResult(node=match, parent=parent, direction=direction, pivot=pivot)


def _report_closest(
    reporter: StatusReporter,
    payload: Any,
    match: Optional[AVLNode],
    found: StatusCode,
    missing: StatusCode,
) -> None:
    if match is not None:
        reporter.report(found, {"node": reporter.dump(payload), "match": reporter.dump(match.payload)})
    else:
        reporter.report(missing, {"node": reporter.dump(payload)})


def node_first(tree: "RelaxedAVLTree", *, reporter: StatusReporter) -> Optional[AVLNode]:
    if tree.root is None:
        reporter.report(StatusCode.EMPTY_TREE)
        return None
    node = tree.root
    while node.left is not None:
        node = node.left
    return node


def node_last(tree: "RelaxedAVLTree", *, reporter: StatusReporter) -> Optional[AVLNode]:
    if tree.root is None:
        reporter.report(StatusCode.EMPTY_TREE)
        return None
    node = tree.root
    while node.right is not None:
        node = node.right
    return node


def node_next(
    tree: "RelaxedAVLTree", node: Optional[AVLNode], *, reporter: StatusReporter
) -> Optional[AVLNode]:
    """In-order successor of ``node``; the first node when ``node`` is None."""

    if node is None:
        return node_first(tree, reporter=reporter)
    if node.right is not None:
        node = node.right
        while node.left is not None:
            node = node.left
        return node
    above = node.parent
    while above is not None and node is above.right:
        node, above = above, above.parent
    return above


def node_prev(
    tree: "RelaxedAVLTree", node: Optional[AVLNode], *, reporter: StatusReporter
) -> Optional[AVLNode]:
    """In-order predecessor of ``node``; the last node when ``node`` is None."""

    if node is None:
        return node_last(tree, reporter=reporter)
    if node.left is not None:
        node = node.left
        while node.right is not None:
            node = node.right
        return node
    above = node.parent
    while above is not None and node is above.left:
        node, above = above, above.parent
    return above


__all__ = [
    "FindMode",
    "SearchResult",
    "find_node",
    "node_first",
    "node_last",
    "node_next",
    "node_prev",
]
