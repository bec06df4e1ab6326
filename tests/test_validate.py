from relaxavl import AVLNode, ValidationKind, validate_subtree
from relaxavl.algo import level_order
from tests.utils import Item, RecordingCallbacks, build_tree


def _chain(keys):
    root = AVLNode(Item(keys[0]))
    node = root
    for key in keys[1:]:
        child = AVLNode(Item(key))
        node.set_child(1, child)
        node = child
    height = 0
    while node is not None:
        node.height = height
        height += 1
        node = node.parent
    return root


def test_valid_tree_passes():
    tree = build_tree(range(100), balance_factor=2)
    assert validate_subtree(tree.root, 2) is None
    assert validate_subtree(None, 1) is None
    assert tree.validate() is None


def test_stale_height_is_reported():
    tree = build_tree([2, 1, 3])
    tree.root.left.height = 4

    failure = validate_subtree(tree.root, 1)

    assert failure.kind is ValidationKind.HEIGHT
    assert failure.payload.key == 1
    assert failure.height == 4


def test_balance_violation_is_reported():
    root = _chain([1, 2, 3])

    failure = validate_subtree(root, 1)
    assert failure.kind is ValidationKind.BALANCE
    assert failure.payload.key == 1
    assert failure.balance == 2

    assert validate_subtree(root, 2) is None
    root.wipe()


def test_tree_validate_reports_failure_without_escalating():
    callbacks = RecordingCallbacks()
    tree = build_tree([2, 1, 3], callbacks=callbacks)
    tree.root.right.height = 3

    assert tree.validate().key == 3
    assert tree.status.code == 1001
    assert callbacks.errors == []
    assert callbacks.events[-1][2] == (
        "Tree validation *failed* on node: '3' (height failure; height: 3 balance: 0)"
    )


def test_tree_validate_reports_success_on_request():
    callbacks = RecordingCallbacks()
    tree = build_tree(range(7), callbacks=callbacks)

    assert tree.validate(report_success=True) is None
    assert callbacks.events[-1][2] == "Tree validation OK; nodes count: 7"

    callbacks.events.clear()
    tree.validate()
    assert callbacks.events == []


def test_validate_empty_tree():
    tree = build_tree([], callbacks=RecordingCallbacks())
    assert tree.validate() is None
    assert tree.status.code == 102


def test_level_order_positions():
    tree = build_tree([4, 2, 6, 1, 3, 5, 7, 8])

    levels = tree.level_order()

    assert sorted(levels) == [0, 1, 2, 3]
    assert levels[0][0][0].key == 4
    assert {pos: entry[0].key for pos, entry in levels[1].items()} == {0: 2, 1: 6}
    assert {pos: entry[0].key for pos, entry in levels[2].items()} == {0: 1, 1: 3, 2: 5, 3: 7}
    assert levels[3][7][0].key == 8
    assert levels[0][0][1:] == (3, 1)


def test_level_order_respects_depth_limit():
    tree = build_tree(range(31))

    assert sorted(level_order(tree.root, 2)) == [0, 1, 2]
    assert len(level_order(tree.root, 2)[2]) == 4
    assert level_order(None) == {}
