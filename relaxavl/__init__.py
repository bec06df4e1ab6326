"""relaxavl: AVL trees with a relaxed, configurable balance factor.

Quick Start
-----------
>>> from relaxavl import FindMode, KeyCallbacks, RelaxedAVLTree
>>>
>>> tree = RelaxedAVLTree(KeyCallbacks(), balance_factor=2)
>>> for value in (7, 1, 9, 3):
...     tree.insert(value)
>>> tree.find(5, FindMode.NEXT)
7
>>> cursor = tree.cursor()
>>> [cursor.first(), cursor.next(), cursor.next()]
[1, 3, 7]

Classes
-------
RelaxedAVLTree : Ordered container with insert/replace/delete/find.
TreeCursor : In-order traversal bound to one tree.
TreeCallbacks : Comparison and diagnostics hooks supplied by the caller.
"""

from .core.diagnostics import package_version

__version__ = package_version()

from .algo import FindMode, ValidationFailure, ValidationKind, validate_subtree
from .core import (
    AVLNode,
    KeyCallbacks,
    MessageCatalog,
    RelaxedAVLTree,
    Severity,
    StatusCode,
    TreeCallbacks,
    TreeCursor,
    TreeError,
    TreeStatistics,
    TreeStatus,
)

__all__ = [
    "__version__",
    "RelaxedAVLTree",
    "TreeCursor",
    "TreeCallbacks",
    "KeyCallbacks",
    "FindMode",
    "MessageCatalog",
    "Severity",
    "StatusCode",
    "TreeError",
    "TreeStatistics",
    "TreeStatus",
    # Internal
    "AVLNode",
    "ValidationFailure",
    "ValidationKind",
    "validate_subtree",
]
