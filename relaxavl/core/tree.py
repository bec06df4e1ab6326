from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from relaxavl import config as ravl_config
from relaxavl.algo.rebalance import rotate
from relaxavl.algo.search import FindMode, find_node, node_first, node_next
from relaxavl.algo.validate import level_order, validate_subtree
from relaxavl.core.callbacks import TreeCallbacks
from relaxavl.core.cursor import TreeCursor
from relaxavl.core.diagnostics import MessageCatalog, StatusCode, StatusReporter
from relaxavl.core.memory import MemoryProbe
from relaxavl.core.node import LEFT, RIGHT, AVLNode
from relaxavl.logging import get_logger

LOGGER = get_logger("core.tree")


@dataclass
class TreeStatistics:
    """Operation counters accumulated over the lifetime of a tree."""

    attempted_inserts: int = 0
    attempted_replaces: int = 0
    attempted_deletes: int = 0
    inserts: int = 0
    replaces: int = 0
    deletes: int = 0
    self_balances: int = 0
    ll: int = 0
    lr: int = 0
    rr: int = 0
    rl: int = 0

    @property
    def rotations(self) -> int:
        return self.ll + self.lr + self.rr + self.rl

    def as_dict(self) -> Dict[str, int]:
        snapshot = asdict(self)
        snapshot["rotations"] = self.rotations
        return snapshot


class RelaxedAVLTree(StatusReporter):
    """Binary search tree kept within a configurable AVL balance factor.

    Payloads are ordered by ``callbacks.compare`` and stored by reference;
    the tree never copies or mutates them. With ``balance_factor=1`` this is
    a standard AVL tree; larger factors trade height for fewer rotations.
    """

    def __init__(
        self,
        callbacks: Optional[TreeCallbacks],
        balance_factor: Optional[int] = None,
        *,
        debug: Optional[bool] = None,
        memory_threshold: Union[int, str, None] = None,
        messages: Union[MessageCatalog, Mapping[Union[int, str], Any], None] = None,
    ) -> None:
        runtime = ravl_config.runtime_config()
        if not isinstance(messages, MessageCatalog):
            messages = MessageCatalog().override(messages or {})
        super().__init__(
            callbacks,
            debug=runtime.debug if debug is None else bool(debug),
            messages=messages,
            fatal_severity=runtime.fatal_severity,
        )
        if callbacks is None:
            # Always fatal: report raises TreeError.
            self.report(StatusCode.NO_CALLBACKS)

        factor = runtime.balance_factor if balance_factor is None else int(balance_factor)
        if factor < 1:
            raise ValueError(f"Unsupported balance factor '{factor}'. Expected an integer >= 1.")
        self.balance_factor = factor
        self.root: Optional[AVLNode] = None
        self.stats = TreeStatistics()
        self._count = 0
        self._epoch = 0

        threshold = (
            runtime.memory_threshold
            if memory_threshold is None
            else ravl_config.parse_bytes(memory_threshold)
        )
        self._memory_probe = MemoryProbe(threshold) if threshold else None

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Any]:
        if self.root is None:
            return
        node = node_first(self, reporter=self)
        while node is not None:
            yield node.payload
            node = node_next(self, node, reporter=self)

    def __enter__(self) -> "RelaxedAVLTree":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.clear()

    @property
    def epoch(self) -> int:
        """Incremented every time the tree is cleared."""
        return self._epoch

    def count(self) -> int:
        self.reset_status()
        return self._count

    def cursor(self, *, debug: Optional[bool] = None) -> TreeCursor:
        return TreeCursor(self, debug=debug)

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def insert(self, payload: Any) -> Any:
        """Store ``payload`` unless its key is present.

        Returns None when the payload was stored (or is the very object
        already stored), otherwise the payload already holding the key.
        """

        self.reset_status()
        if not self.check_payload(payload, "insert"):
            return None
        self.stats.attempted_inserts += 1
        node, created = self._probe(payload)
        if node is None or node.payload is payload:
            if created:
                self.stats.inserts += 1
            return None
        return node.payload

    def replace(self, payload: Any) -> Any:
        """Store ``payload``, overwriting the payload holding the same key.

        Returns the overwritten payload, or None when nothing was displaced.
        """

        self.reset_status()
        if not self.check_payload(payload, "replace"):
            return None
        self.stats.attempted_replaces += 1
        node, created = self._probe(payload)
        if node is None:
            return None
        self.stats.replaces += 1
        if created or node.payload is payload:
            return None
        previous = node.payload
        node.payload = payload
        return previous

    def find(self, payload: Any, mode: Union[FindMode, str] = FindMode.EXACT) -> Any:
        self.reset_status()
        if not self.check_payload(payload, "find"):
            return None
        if self.root is None:
            self.report(StatusCode.EMPTY_TREE)
            return None
        result = find_node(self, payload, FindMode(mode), reporter=self)
        return result.node.payload if result.node is not None else None

    def delete(self, payload: Any) -> Any:
        """Remove the payload whose key matches ``payload`` and return it."""

        self.reset_status()
        if not self.check_payload(payload, "delete"):
            return None
        if self.root is None:
            self.report(StatusCode.EMPTY_TREE)
            return None
        self.stats.attempted_deletes += 1

        result = find_node(self, payload, FindMode.EXACT, reporter=self)
        target = result.node
        if target is None:
            return None
        removed = target.payload
        above, direction = result.parent, result.direction
        node_type: List[str] = []
        if above is None:
            node_type.append(self.messages.label("root"))

        if target.left is None or target.right is None:
            if target.left is None and target.right is None:
                node_type.append(self.messages.label("leaf"))
                replacement = None
            elif target.left is None:
                node_type.append(self.messages.label("no_left"))
                replacement = target.right
            else:
                node_type.append(self.messages.label("no_right"))
                replacement = target.left
            if above is not None:
                above.set_child(direction, replacement)
            shrunk = above
        else:
            node_type.append(self.messages.label("internal"))
            successor = target.right
            if successor.left is None:
                if self.debug:
                    node_type.append(
                        self.messages.label("successor_no_left", {"node": self.dump(successor.payload)})
                    )
                successor.set_child(LEFT, target.left)
                successor.height = target.height
                replacement = successor
                shrunk = successor
            else:
                if self.debug:
                    node_type.append(
                        self.messages.label("successor_left", {"node": self.dump(successor.payload)})
                    )
                while successor.left is not None:
                    successor = successor.left
                shrunk = successor.parent
                shrunk.left = successor.right
                if shrunk.left is not None:
                    shrunk.left.parent = shrunk
                successor.set_child(LEFT, target.left)
                successor.set_child(RIGHT, target.right)
                successor.height = target.height
                replacement = successor
            if above is not None:
                above.set_child(direction, replacement)

        if above is None:
            self.root = replacement
            if replacement is not None:
                replacement.parent = None

        target.left = target.right = None
        target.parent = None
        target.payload = None
        self._count -= 1
        self.stats.deletes += 1
        if self.debug:
            self.report(
                StatusCode.DELETED,
                {
                    "node_type": "".join(f" {kind}" for kind in node_type),
                    "node": self.dump(removed),
                    "replace_by": (
                        f"'{self.dump(replacement.payload)}'"
                        if replacement is not None
                        else self.messages.label("none")
                    ),
                    "count": self._count,
                },
            )

        self._rebalance_after_delete(shrunk)
        return removed

    def clear(self) -> int:
        """Drop every node, returning how many were wiped."""

        self.reset_status()
        wiped = 0
        if self.root is not None:
            wiped = self.root.wipe()
            self.root = None
            self._count = 0
            if self.debug:
                self.report(StatusCode.WIPED, {"count": wiped})
        self._epoch += 1
        LOGGER.debug("Cleared tree with %d nodes", wiped)
        return wiped

    # ------------------------------------------------------------------
    # Debugging and reporting
    # ------------------------------------------------------------------

    def validate(self, report_success: bool = False) -> Any:
        """Return the payload of the first inconsistent node, or None."""

        self.reset_status()
        if self.root is None:
            self.report(StatusCode.EMPTY_TREE)
            return None
        failure = validate_subtree(self.root, self.balance_factor)
        if failure is not None:
            self.report(
                StatusCode.VALIDATION_FAILED,
                {
                    "node": self.dump(failure.payload),
                    "failure": self.messages.label(failure.kind.value),
                    "height": failure.height,
                    "balance": failure.balance,
                },
            )
            return failure.payload
        if report_success:
            self.report(StatusCode.VALIDATION_OK, {"count": self._count})
        return None

    def level_order(self, max_level: int = 5) -> Dict[int, Dict[int, Tuple[Any, int, int]]]:
        return level_order(self.root, max_level)

    def statistics(self, name: Optional[str] = None, report: bool = False) -> Any:
        self.reset_status()
        snapshot: Dict[str, int] = self.stats.as_dict()
        snapshot["balance_factor"] = self.balance_factor
        snapshot["height"] = self.root.height if self.root is not None else -1
        snapshot["count"] = self._count
        if report:
            self.report(StatusCode.STATS_SHAPE, snapshot)
            self.report(StatusCode.STATS_OPERATIONS, snapshot)
            self.report(StatusCode.STATS_BALANCING, snapshot)
        if name is None:
            return snapshot
        return snapshot.get(name)

    # ------------------------------------------------------------------
    # Balancing engine
    # ------------------------------------------------------------------

    def _probe(self, payload: Any) -> Tuple[Optional[AVLNode], bool]:
        """Find or create the node for ``payload``; the flag tells which."""

        result = find_node(self, payload, FindMode.EXACT, reporter=self)
        if result.node is not None:
            if self.debug:
                self.report(StatusCode.NODE_EXISTS, {"node": self.dump(payload)})
            return result.node, False

        if self._memory_probe is not None and self._memory_probe.exhausted():
            self.report(StatusCode.NOT_ENOUGH_MEMORY, {"node": self.dump(payload)})
            return None, False

        above, pivot = result.parent, result.pivot
        node = AVLNode(payload, above)
        self._count += 1
        if above is None:
            self.root = node
            if self.debug:
                self.report(StatusCode.INSERTED_ROOT, {"node": self.dump(payload), "count": self._count})
            return node, True

        above.set_child(result.direction, node)
        if self.debug:
            self.report(
                StatusCode.INSERTED,
                {
                    "node": self.dump(payload),
                    "direction": self.messages.label("left" if result.direction == LEFT else "right"),
                    "parent": self.dump(above.payload),
                    "count": self._count,
                },
            )

        child = node
        while child is not pivot:
            above = child.parent
            balance = above.balance()
            if (above.left is child and balance >= 0) or (above.right is child and balance <= 0):
                self.stats.self_balances += 1
                if self.debug:
                    self.report(
                        StatusCode.SELF_BALANCING,
                        {"node": self.dump(above.payload), "balance": balance},
                    )
                return node, True
            above.height += 1
            if self.debug:
                self.report(
                    StatusCode.HEIGHT_INCREASE,
                    {"node": self.dump(above.payload), "height": above.height, "balance": balance},
                )
            child = above

        if abs(pivot.balance()) > self.balance_factor:
            rotate(self, pivot)
        return node, True

    def _rebalance_after_delete(self, node: Optional[AVLNode]) -> None:
        while node is not None:
            above = node.parent
            height = node.height
            if abs(node.balance()) > self.balance_factor:
                top = rotate(self, node)
                if top.height == height:
                    break
            else:
                node.reset_height()
                if node.height == height:
                    self.stats.self_balances += 1
                    if self.debug:
                        self.report(
                            StatusCode.SELF_BALANCING,
                            {"node": self.dump(node.payload), "balance": node.balance()},
                        )
                    break
                if self.debug:
                    self.report(
                        StatusCode.HEIGHT_DECREASE,
                        {
                            "node": self.dump(node.payload),
                            "height": node.height,
                            "balance": node.balance(),
                        },
                    )
            node = above


__all__ = ["RelaxedAVLTree", "TreeStatistics"]
