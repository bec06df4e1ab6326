from __future__ import annotations

from typing import List

from hypothesis import given, settings, strategies as st

from relaxavl import FindMode
from relaxavl.algo import validate_subtree
from tests.utils import Item, build_tree, inorder_keys, iter_nodes

_keys_strategy = st.lists(st.integers(min_value=-500, max_value=500), max_size=120)
_factor_strategy = st.integers(min_value=1, max_value=4)


def _assert_parent_links(tree) -> None:
    if tree.root is not None:
        assert tree.root.parent is None
    for node in iter_nodes(tree.root):
        for child in (node.left, node.right):
            if child is not None:
                assert child.parent is node


@settings(max_examples=60, deadline=None)
@given(keys=_keys_strategy, balance_factor=_factor_strategy)
def test_inserts_keep_order_and_balance(keys: List[int], balance_factor: int) -> None:
    tree = build_tree(keys, balance_factor=balance_factor)

    assert inorder_keys(tree) == sorted(set(keys))
    assert tree.count() == len(set(keys))
    assert validate_subtree(tree.root, balance_factor) is None
    _assert_parent_links(tree)


@settings(max_examples=60, deadline=None)
@given(keys=_keys_strategy, victims=_keys_strategy, balance_factor=_factor_strategy)
def test_deletes_keep_order_and_balance(keys: List[int], victims: List[int], balance_factor: int) -> None:
    tree = build_tree(keys, balance_factor=balance_factor)
    expected = set(keys)

    for victim in victims:
        removed = tree.delete(Item(victim))
        if victim in expected:
            assert removed.key == victim
            expected.remove(victim)
        else:
            assert removed is None

    assert inorder_keys(tree) == sorted(expected)
    assert tree.count() == len(expected)
    assert validate_subtree(tree.root, balance_factor) is None
    _assert_parent_links(tree)


@settings(max_examples=40, deadline=None)
@given(keys=_keys_strategy, balance_factor=_factor_strategy)
def test_deleting_everything_empties_the_tree(keys: List[int], balance_factor: int) -> None:
    tree = build_tree(keys, balance_factor=balance_factor)

    for key in keys:
        tree.delete(Item(key))

    assert tree.root is None
    assert tree.count() == 0
    stats = tree.statistics()
    assert stats["inserts"] == stats["deletes"] == len(set(keys))


@settings(max_examples=60, deadline=None)
@given(keys=st.lists(st.integers(min_value=0, max_value=200), min_size=1, max_size=60), probe=st.integers(-10, 210))
def test_closest_matches_agree_with_sorted_keys(keys: List[int], probe: int) -> None:
    tree = build_tree(keys)
    ordered = sorted(set(keys))

    below = [key for key in ordered if key <= probe]
    above = [key for key in ordered if key >= probe]
    found_prev = tree.find(Item(probe), FindMode.PREV)
    found_next = tree.find(Item(probe), FindMode.NEXT)

    assert (found_prev.key if found_prev is not None else None) == (below[-1] if below else None)
    assert (found_next.key if found_next is not None else None) == (above[0] if above else None)


@settings(max_examples=40, deadline=None)
@given(keys=_keys_strategy)
def test_standard_avl_height_bound(keys: List[int]) -> None:
    tree = build_tree(keys, balance_factor=1)
    count = tree.count()
    if count == 0:
        return
    # Minimal AVL tree of height h holds fib(h + 3) - 1 nodes.
    minimal = [1, 2]
    while len(minimal) <= tree.root.height:
        minimal.append(minimal[-1] + minimal[-2] + 1)
    assert count >= minimal[tree.root.height]
