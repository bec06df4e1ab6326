"""Search, rotation, and validation routines shared by trees and cursors."""

from .search import (
    FindMode,
    SearchResult,
    find_node,
    node_first,
    node_last,
    node_next,
    node_prev,
)
from .rebalance import rotate
from .validate import ValidationFailure, ValidationKind, level_order, validate_subtree

__all__ = [
    "FindMode",
    "SearchResult",
    "find_node",
    "node_first",
    "node_last",
    "node_next",
    "node_prev",
    "rotate",
    "ValidationFailure",
    "ValidationKind",
    "level_order",
    "validate_subtree",
]
