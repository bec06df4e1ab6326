import pytest

from relaxavl.algo import validate_subtree
from tests.utils import Item, RecordingCallbacks, build_tree, inorder_keys


def _shape(node):
    if node is None:
        return None
    return (node.payload.key, node.height, _shape(node.left), _shape(node.right))


@pytest.mark.parametrize(
    "keys, counter",
    [
        ([1, 2, 3], "rr"),
        ([3, 2, 1], "ll"),
        ([3, 1, 2], "lr"),
        ([1, 3, 2], "rl"),
    ],
)
def test_single_and_double_rotations(keys, counter):
    tree = build_tree(keys, balance_factor=1)

    assert _shape(tree.root) == (2, 1, (1, 0, None, None), (3, 0, None, None))
    assert tree.root.parent is None
    assert tree.root.left.parent is tree.root
    assert tree.root.right.parent is tree.root
    stats = tree.statistics()
    assert stats[counter] == 1
    assert stats["rotations"] == 1


def test_relaxed_factor_tolerates_skew():
    tree = build_tree([1, 2, 3], balance_factor=2)

    assert tree.root.payload.key == 1
    assert tree.root.height == 2
    assert tree.statistics("rotations") == 0

    tree.insert(Item(4))
    assert tree.statistics("rr") == 1
    assert validate_subtree(tree.root, 2) is None
    assert inorder_keys(tree) == [1, 2, 3, 4]


def test_rotation_below_root_reattaches_subtree():
    tree = build_tree([5, 2, 8, 9, 10], balance_factor=1)

    assert tree.root.payload.key == 5
    right = tree.root.right
    assert right.payload.key == 9
    assert right.parent is tree.root
    assert (right.left.payload.key, right.right.payload.key) == (8, 10)
    assert tree.root.height == 2


def test_self_balancing_insert_stops_early():
    tree = build_tree([2, 1], balance_factor=1)
    tree.insert(Item(3))

    assert tree.statistics("self_balances") == 1
    assert tree.statistics("rotations") == 0
    assert tree.root.height == 1


def test_delete_triggers_rotation():
    tree = build_tree([2, 1, 3, 4], balance_factor=1)

    tree.delete(Item(1))

    assert tree.statistics("rr") == 1
    assert _shape(tree.root) == (3, 1, (2, 0, None, None), (4, 0, None, None))


def test_rotation_emits_debug_diagnostic():
    callbacks = RecordingCallbacks()
    build_tree([1, 2, 3], balance_factor=1, callbacks=callbacks, debug=True)

    messages = [text for _, code, text in callbacks.events if code == 7]
    assert messages == ["RR rotation on node '1' (balance: 2)"]
