from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Any, Deque, Dict, List, Optional, Tuple

from relaxavl.core.node import LEFT, RIGHT, AVLNode


class ValidationKind(Enum):
    HEIGHT = "height"
    BALANCE = "balance"


@dataclass(frozen=True)
class ValidationFailure:
    node: AVLNode
    kind: ValidationKind
    height: int
    balance: int

    @property
    def payload(self) -> Any:
        return self.node.payload


def validate_subtree(root: Optional[AVLNode], balance_factor: int) -> Optional[ValidationFailure]:
    """Check cached heights and balance tolerance below ``root``.

    Heights are recomputed bottom-up without reading the cached values.
    Nodes are visited in post-order and the first inconsistent one is
    returned.
    """

    if root is None:
        return None
    computed: Dict[AVLNode, int] = {}
    stack: List[Tuple[AVLNode, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if not expanded:
            stack.append((node, True))
            if node.right is not None:
                stack.append((node.right, False))
            if node.left is not None:
                stack.append((node.left, False))
            continue
        left_height = computed.pop(node.left) if node.left is not None else -1
        right_height = computed.pop(node.right) if node.right is not None else -1
        height = max(left_height, right_height) + 1
        computed[node] = height
        if node.height != height:
            return ValidationFailure(node, ValidationKind.HEIGHT, node.height, node.balance())
        if abs(node.balance()) > balance_factor:
            return ValidationFailure(node, ValidationKind.BALANCE, node.height, node.balance())
    return None


def level_order(
    root: Optional[AVLNode], max_level: int = 5
) -> Dict[int, Dict[int, Tuple[Any, int, int]]]:
    """Map ``level -> position -> (payload, height, balance)`` for the top levels.

    A position is the left/right path from the root read as a binary number.
    """

    levels: Dict[int, Dict[int, Tuple[Any, int, int]]] = {}
    if root is None:
        return levels
    queue: Deque[Tuple[AVLNode, int, int]] = deque([(root, 0, 0)])
    while queue:
        node, level, position = queue.popleft()
        levels.setdefault(level, {})[position] = (node.payload, node.height, node.balance())
        if level == max_level:
            continue
        if node.left is not None:
            queue.append((node.left, level + 1, position * 2 + LEFT))
        if node.right is not None:
            queue.append((node.right, level + 1, position * 2 + RIGHT))
    return levels


__all__ = ["ValidationFailure", "ValidationKind", "level_order", "validate_subtree"]
