"""Shared test utilities for relaxavl."""

from .payloads import (
    Item,
    ItemCallbacks,
    RecordingCallbacks,
    build_tree,
    inorder_keys,
    iter_nodes,
    random_keys,
)

__all__ = [
    "Item",
    "ItemCallbacks",
    "RecordingCallbacks",
    "build_tree",
    "inorder_keys",
    "iter_nodes",
    "random_keys",
]
