"""Core data structures of the relaxed AVL tree."""

from .diagnostics import (
    MessageCatalog,
    Severity,
    StatusCode,
    StatusReporter,
    TreeError,
    TreeStatus,
)
from .node import LEFT, RIGHT, AVLNode
from .callbacks import KeyCallbacks, TreeCallbacks
from .memory import MemoryProbe
from .cursor import TreeCursor
from .tree import RelaxedAVLTree, TreeStatistics

__all__ = [
    "AVLNode",
    "LEFT",
    "RIGHT",
    "KeyCallbacks",
    "TreeCallbacks",
    "MemoryProbe",
    "MessageCatalog",
    "Severity",
    "StatusCode",
    "StatusReporter",
    "TreeError",
    "TreeStatus",
    "TreeCursor",
    "RelaxedAVLTree",
    "TreeStatistics",
]
