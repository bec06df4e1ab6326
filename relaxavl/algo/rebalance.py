from __future__ import annotations

from typing import TYPE_CHECKING

from relaxavl.core.diagnostics import StatusCode
from relaxavl.core.node import LEFT, RIGHT, AVLNode

if TYPE_CHECKING:  # pragma: no cover
    from relaxavl.core.tree import RelaxedAVLTree


def _report_rotation(tree: "RelaxedAVLTree", y: AVLNode, kind: str) -> None:
    if tree.debug:
        tree.report(
            StatusCode.ROTATION,
            {"node": tree.dump(y.payload), "rotation": kind, "balance": y.balance()},
        )


def rotate(tree: "RelaxedAVLTree", y: AVLNode) -> AVLNode:
    """Restore the balance at ``y`` with a single or double rotation.

    Returns the node that took ``y``'s place.
    """

    above = y.parent
    if y.balance() < 0:
        x = y.left
        if x.balance() <= 0:
            tree.stats.ll += 1
            _report_rotation(tree, y, "LL")
            w = x
            y.left = x.right
            if y.left is not None:
                y.left.parent = y
            x.right = y
            y.parent = x
            y.reset_height()
            x.reset_height()
        else:
            tree.stats.lr += 1
            _report_rotation(tree, y, "LR")
            w = x.right
            x.right = w.left
            if x.right is not None:
                x.right.parent = x
            w.left = x
            y.left = w.right
            if y.left is not None:
                y.left.parent = y
            w.right = y
            x.parent = w
            y.parent = w
            y.reset_height()
            x.reset_height()
            w.reset_height()
    else:
        x = y.right
        if x.balance() >= 0:
            tree.stats.rr += 1
            _report_rotation(tree, y, "RR")
            w = x
            y.right = x.left
            if y.right is not None:
                y.right.parent = y
            x.left = y
            y.parent = x
            y.reset_height()
            x.reset_height()
        else:
            tree.stats.rl += 1
            _report_rotation(tree, y, "RL")
            w = x.left
            x.left = w.right
            if x.left is not None:
                x.left.parent = x
            w.right = x
            y.right = w.left
            if y.right is not None:
                y.right.parent = y
            w.left = y
            x.parent = w
            y.parent = w
            y.reset_height()
            x.reset_height()
            w.reset_height()

    if above is None:
        w.parent = None
        tree.root = w
    elif above.left is y:
        above.set_child(LEFT, w)
    else:
        above.set_child(RIGHT, w)
    return w


__all__ = ["rotate"]
