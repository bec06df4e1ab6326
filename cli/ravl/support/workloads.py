from __future__ import annotations

import re
from dataclasses import dataclass
from operator import attrgetter
from typing import Any, Dict, Iterable, List, Literal, Optional, Sequence

import numpy as np
from numpy.random import Generator

from relaxavl import KeyCallbacks, MessageCatalog, RelaxedAVLTree

KeyMode = Literal["random", "unique", "sequential"]

LOREM_IPSUM = (
    "Lorem ipsum dolor sit amet, consectetur adipisicing elit, sed do eiusmod "
    "tempor incididunt ut labore et dolore magna aliqua. Ut enim ad minim veniam, "
    "quis nostrud exercitation ullamco laboris nisi ut aliquip ex ea commodo consequat. "
    "Duis aute irure dolor in reprehenderit in voluptate velit esse cillum dolore eu "
    "fugiat nulla pariatur. Excepteur sint occaecat cupidatat non proident, sunt in "
    "culpa qui officia deserunt mollit anim id est laborum."
)


@dataclass(eq=False)
class Record:
    """Demo payload; the tree orders records by ``key`` and stores them by identity."""

    key: Any


class RecordCallbacks(KeyCallbacks):
    def __init__(self) -> None:
        super().__init__(key=attrgetter("key"))


def generate_keys(
    rng: Generator,
    count: int,
    *,
    max_value: int,
    mode: KeyMode = "random",
) -> List[int]:
    """Draw ``count`` integer keys in ``[0, max_value]``.

    ``random`` may repeat keys, ``unique`` never does (and is capped at the
    size of the range), ``sequential`` ignores the generator.
    """

    if count <= 0:
        return []
    if mode == "sequential":
        return list(range(count))
    if mode == "unique":
        size = min(count, max_value + 1)
        return [int(v) for v in rng.choice(max_value + 1, size=size, replace=False)]
    if mode == "random":
        return [int(v) for v in rng.integers(0, max_value + 1, size=count)]
    raise ValueError(f"Unsupported key mode '{mode}'.")


def split_words(text: str) -> List[str]:
    return [word for word in re.split(r"[\s,.]+", text) if word]


def build_tree(
    keys: Iterable[Any],
    *,
    balance_factor: int,
    callbacks: Optional[KeyCallbacks] = None,
    debug: bool = False,
    messages: Optional[MessageCatalog] = None,
) -> RelaxedAVLTree:
    tree = RelaxedAVLTree(
        callbacks or RecordCallbacks(),
        balance_factor,
        debug=debug,
        messages=messages,
    )
    for key in keys:
        tree.insert(Record(key))
    return tree


@dataclass(frozen=True)
class ForestSummary:
    balance_factor: int
    trees: int
    nodes_mean: float
    height_mean: float
    height_min: int
    height_max: int
    rotations_mean: float
    self_balances_mean: float

    def as_dict(self) -> Dict[str, Any]:
        return {
            "balance_factor": self.balance_factor,
            "trees": self.trees,
            "nodes_mean": self.nodes_mean,
            "height_mean": self.height_mean,
            "height_min": self.height_min,
            "height_max": self.height_max,
            "rotations_mean": self.rotations_mean,
            "self_balances_mean": self.self_balances_mean,
        }


def run_forest(
    rng: Generator,
    *,
    cycles: int,
    nodes: int,
    max_value: int,
    balance_factors: Sequence[int],
    mode: KeyMode = "unique",
) -> List[ForestSummary]:
    """Grow ``cycles`` trees per balance factor and summarise their shape.

    Every balance factor sees the same key sequences so the summaries are
    directly comparable.
    """

    workloads = [generate_keys(rng, nodes, max_value=max_value, mode=mode) for _ in range(cycles)]
    summaries: List[ForestSummary] = []
    for balance_factor in balance_factors:
        heights = np.zeros(cycles, dtype=np.int64)
        counts = np.zeros(cycles, dtype=np.int64)
        rotations = np.zeros(cycles, dtype=np.int64)
        self_balances = np.zeros(cycles, dtype=np.int64)
        for idx, keys in enumerate(workloads):
            with build_tree(keys, balance_factor=balance_factor) as tree:
                stats = tree.statistics()
                heights[idx] = stats["height"]
                counts[idx] = stats["count"]
                rotations[idx] = stats["rotations"]
                self_balances[idx] = stats["self_balances"]
        summaries.append(
            ForestSummary(
                balance_factor=balance_factor,
                trees=cycles,
                nodes_mean=float(counts.mean()) if cycles else 0.0,
                height_mean=float(heights.mean()) if cycles else 0.0,
                height_min=int(heights.min()) if cycles else -1,
                height_max=int(heights.max()) if cycles else -1,
                rotations_mean=float(rotations.mean()) if cycles else 0.0,
                self_balances_mean=float(self_balances.mean()) if cycles else 0.0,
            )
        )
    return summaries


def render_levels(tree: RelaxedAVLTree, max_level: int = 5) -> List[str]:
    """One line per level: ``key(height/balance)`` entries with their positions."""

    lines: List[str] = []
    callbacks = tree.callbacks
    for level, row in sorted(tree.level_order(max_level).items()):
        cells = [
            f"[{position}] {callbacks.dump(payload)}({height}/{balance:+d})"
            for position, (payload, height, balance) in sorted(row.items())
        ]
        lines.append(f"L{level}: " + "  ".join(cells))
    return lines


__all__ = [
    "LOREM_IPSUM",
    "ForestSummary",
    "KeyMode",
    "Record",
    "RecordCallbacks",
    "build_tree",
    "generate_keys",
    "render_levels",
    "run_forest",
    "split_words",
]
