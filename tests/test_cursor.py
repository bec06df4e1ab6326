from relaxavl import FindMode, StatusCode
from tests.utils import Item, RecordingCallbacks, build_tree


def test_cursor_walks_both_directions():
    tree = build_tree([5, 3, 8, 1])
    cursor = tree.cursor()

    assert cursor.first().key == 1
    assert cursor.next().key == 3
    assert cursor.next().key == 5
    assert cursor.curr().key == 5
    assert cursor.prev().key == 3
    assert cursor.last().key == 8
    assert cursor.next() is None
    assert cursor.curr() is None


def test_unpositioned_cursor_wraps_to_ends():
    tree = build_tree([2, 1, 3])
    cursor = tree.cursor()

    assert cursor.curr() is None
    assert cursor.next().key == 1

    cursor = tree.cursor()
    assert cursor.prev().key == 3
    assert cursor.prev().key == 2
    assert cursor.prev().key == 1
    assert cursor.prev() is None
    assert cursor.next().key == 1


def test_cursor_find_positions_the_cursor():
    tree = build_tree([10, 20, 30, 40])
    cursor = tree.cursor()

    assert cursor.find(Item(25), FindMode.NEXT).key == 30
    assert cursor.next().key == 40

    assert cursor.find(Item(25), "prev").key == 20
    assert cursor.prev().key == 10

    assert cursor.find(Item(25)) is None
    assert cursor.curr() is None


def test_cursor_iteration_continues_from_position():
    tree = build_tree(range(6))
    cursor = tree.cursor()

    assert [item.key for item in cursor] == [0, 1, 2, 3, 4, 5]

    cursor.find(Item(3))
    assert [item.key for item in cursor] == [3, 4, 5]


def test_clear_invalidates_cursor():
    tree = build_tree([1, 2, 3])
    cursor = tree.cursor()
    cursor.last()

    tree.clear()
    tree.insert(Item(7))

    assert cursor.curr() is None
    assert cursor.next().key == 7


def test_deleting_current_node_invalidates_cursor():
    tree = build_tree([1, 2, 3])
    cursor = tree.cursor()
    cursor.find(Item(2))

    tree.delete(Item(2))

    assert cursor.curr() is None
    assert cursor.next().key == 1


def test_cursor_survives_other_deletes():
    tree = build_tree(range(10))
    cursor = tree.cursor()
    cursor.find(Item(5))

    for key in (0, 3, 4, 6, 9):
        tree.delete(Item(key))

    assert cursor.curr().key == 5
    assert cursor.next().key == 7
    assert cursor.prev().key == 5
    assert cursor.prev().key == 2


def test_cursor_on_empty_tree_reports_warning():
    callbacks = RecordingCallbacks()
    tree = build_tree([], callbacks=callbacks)
    cursor = tree.cursor()

    assert cursor.first() is None
    assert cursor.status.code == StatusCode.EMPTY_TREE
    assert cursor.find(Item(1)) is None
    assert cursor.status.code == StatusCode.EMPTY_TREE
    assert callbacks.events[-1][2] == "Empty tree."


def test_cursor_rejects_none_payload():
    tree = build_tree([1])
    cursor = tree.cursor()

    assert cursor.find(None) is None
    assert cursor.status.code == StatusCode.INVALID_PAYLOAD
    assert "TreeCursor.find" in cursor.status_message


def test_cursor_inherits_debug_setting():
    callbacks = RecordingCallbacks()
    tree = build_tree([1, 2], callbacks=callbacks, debug=True)
    assert tree.cursor().debug is True
    assert tree.cursor(debug=False).debug is False
    assert tree.cursor().tree is tree
