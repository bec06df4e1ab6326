from __future__ import annotations

import weakref
from typing import Any, List, Optional

LEFT = 0
RIGHT = 1


class AVLNode:
    """A tree node holding a payload reference and a cached subtree height.

    Children are owned through the ``left``/``right`` slots. The parent link
    is a weak reference, so a node is kept alive only by the slot above it
    (or by the tree root) and never by its children.
    """

    __slots__ = ("payload", "left", "right", "height", "_parent", "__weakref__")

    def __init__(self, payload: Any, parent: Optional["AVLNode"] = None) -> None:
        self.payload = payload
        self.left: Optional[AVLNode] = None
        self.right: Optional[AVLNode] = None
        self.height = 0
        self._parent: Optional[weakref.ReferenceType] = None
        self.parent = parent

    def __repr__(self) -> str:
        return f"AVLNode(payload={self.payload!r}, height={self.height})"

    @property
    def parent(self) -> Optional["AVLNode"]:
        if self._parent is None:
            return None
        return self._parent()

    @parent.setter
    def parent(self, node: Optional["AVLNode"]) -> None:
        self._parent = None if node is None else weakref.ref(node)

    def child(self, direction: int) -> Optional["AVLNode"]:
        return self.left if direction == LEFT else self.right

    def set_child(self, direction: int, node: Optional["AVLNode"]) -> None:
        if direction == LEFT:
            self.left = node
        else:
            self.right = node
        if node is not None:
            node.parent = self

    def direction_of(self, node: "AVLNode") -> int:
        """Side on which ``node`` hangs below this node."""
        return LEFT if self.left is node else RIGHT

    def balance(self) -> int:
        left_height = self.left.height if self.left is not None else -1
        right_height = self.right.height if self.right is not None else -1
        return right_height - left_height

    def reset_height(self) -> None:
        left_height = self.left.height if self.left is not None else -1
        right_height = self.right.height if self.right is not None else -1
        self.height = max(left_height, right_height) + 1

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def wipe(self, counter: int = 0) -> int:
        """Remove the subtree rooted here in post-order.

        Every node is detached from its parent and loses its payload
        reference. Returns ``counter`` plus the number of removed nodes.
        """

        parent = self.parent
        if parent is not None:
            if parent.left is self:
                parent.left = None
            elif parent.right is self:
                parent.right = None

        stack: List[AVLNode] = [self]
        while stack:
            node = stack[-1]
            if node.left is not None:
                stack.append(node.left)
                continue
            if node.right is not None:
                stack.append(node.right)
                continue
            stack.pop()
            if stack:
                above = stack[-1]
                if above.left is node:
                    above.left = None
                else:
                    above.right = None
            node.payload = None
            node.parent = None
            counter += 1
        return counter


__all__ = ["AVLNode", "LEFT", "RIGHT"]
