from __future__ import annotations

import argparse
import json
import time
import uuid
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, List, Literal, Tuple

import numpy as np

from cli.ravl.support.workloads import Record, RecordCallbacks
from relaxavl import RelaxedAVLTree
from relaxavl import config as ravl_config

BATCH_OPS_RESULT_SCHEMA_ID = "relaxavl.benchmarks.batch_ops.v1"


@dataclass(frozen=True)
class BenchmarkResult:
    mode: Literal["insert", "delete"]
    balance_factor: int
    elapsed_seconds: float
    batches: int
    batch_size: int
    operations: int
    throughput_ops_per_sec: float
    height: int
    rotations: int


def _write_result_artifact(
    path: Path,
    *,
    run_id: str,
    args: argparse.Namespace,
    result: BenchmarkResult,
) -> None:
    runtime = ravl_config.runtime_config()
    payload = {
        "schema_id": BATCH_OPS_RESULT_SCHEMA_ID,
        "run_id": run_id,
        "timestamp": time.time(),
        "result": asdict(result),
        "parameters": {
            "seed": args.seed,
            "bootstrap_batches": args.bootstrap_batches,
        },
        "runtime": asdict(runtime),
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")


def benchmark_insert(
    *,
    balance_factor: int,
    batch_size: int,
    batches: int,
    seed: int,
) -> Tuple[RelaxedAVLTree, List[int], BenchmarkResult]:
    rng = np.random.default_rng(seed)
    tree = RelaxedAVLTree(RecordCallbacks(), balance_factor, debug=False)
    keys: List[int] = []
    start = time.perf_counter()
    for _ in range(batches):
        batch = rng.integers(0, 2**62, size=batch_size)
        for key in batch.tolist():
            if tree.insert(Record(key)) is None:
                keys.append(key)
    elapsed = time.perf_counter() - start
    operations = batch_size * batches
    throughput = operations / elapsed if elapsed > 0 else float("inf")
    stats = tree.statistics()
    return tree, keys, BenchmarkResult(
        mode="insert",
        balance_factor=balance_factor,
        elapsed_seconds=elapsed,
        batches=batches,
        batch_size=batch_size,
        operations=operations,
        throughput_ops_per_sec=throughput,
        height=stats["height"],
        rotations=stats["rotations"],
    )


def benchmark_delete(
    tree: RelaxedAVLTree,
    keys: List[Any],
    *,
    batch_size: int,
    batches: int,
    seed: int,
) -> Tuple[RelaxedAVLTree, BenchmarkResult]:
    rng = np.random.default_rng(seed)
    order = rng.permutation(len(keys))
    rotations_before = tree.stats.rotations
    start = time.perf_counter()
    completed_batches = 0
    cursor = 0
    for _ in range(batches):
        if len(tree) < batch_size:
            break
        for position in order[cursor : cursor + batch_size].tolist():
            tree.delete(Record(keys[position]))
        cursor += batch_size
        completed_batches += 1
    elapsed = time.perf_counter() - start
    operations = batch_size * completed_batches
    throughput = operations / elapsed if elapsed > 0 else float("inf")
    return tree, BenchmarkResult(
        mode="delete",
        balance_factor=tree.balance_factor,
        elapsed_seconds=elapsed,
        batches=completed_batches,
        batch_size=batch_size,
        operations=operations,
        throughput_ops_per_sec=throughput,
        height=tree.root.height if tree.root is not None else -1,
        rotations=tree.stats.rotations - rotations_before,
    )


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Benchmark insert/delete throughput of the relaxed AVL tree."
    )
    parser.add_argument(
        "mode",
        choices=("insert", "delete"),
        help="Operation to benchmark.",
    )
    parser.add_argument(
        "--balance-factor",
        type=int,
        default=1,
        help="Tolerated height difference between sibling subtrees.",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=1024,
        help="Number of keys per batch.",
    )
    parser.add_argument(
        "--batches",
        type=int,
        default=20,
        help="Number of batches to execute.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed for key generation.",
    )
    parser.add_argument(
        "--run-id",
        type=str,
        default=None,
        help="Optional run identifier embedded in the JSON summary.",
    )
    parser.add_argument(
        "--bootstrap-batches",
        type=int,
        default=20,
        help="Insert batches used to populate the tree before delete benchmarks.",
    )
    parser.add_argument(
        "--log-json",
        type=str,
        default="",
        help="Optional path to write a JSON summary for the run.",
    )
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    run_id = args.run_id or f"batchops-{uuid.uuid4().hex[:8]}"
    mode: Literal["insert", "delete"] = args.mode  # type: ignore[assignment]

    if mode == "insert":
        _, _, result = benchmark_insert(
            balance_factor=args.balance_factor,
            batch_size=args.batch_size,
            batches=args.batches,
            seed=args.seed,
        )
    else:
        tree, keys, _ = benchmark_insert(
            balance_factor=args.balance_factor,
            batch_size=args.batch_size,
            batches=args.bootstrap_batches,
            seed=args.seed,
        )
        _, result = benchmark_delete(
            tree,
            keys,
            batch_size=args.batch_size,
            batches=args.batches,
            seed=args.seed + 1,
        )

    print(
        f"{result.mode} | bf={result.balance_factor} batches={result.batches} "
        f"batch_size={result.batch_size} "
        f"ops={result.operations} "
        f"time={result.elapsed_seconds:.4f}s "
        f"throughput={result.throughput_ops_per_sec:,.1f} ops/s "
        f"height={result.height} rotations={result.rotations}"
    )
    if args.log_json:
        log_path = Path(args.log_json)
        _write_result_artifact(log_path, run_id=run_id, args=args, result=result)
        print(f"[batch_ops] wrote summary to {log_path} (run_id={run_id})")


if __name__ == "__main__":
    main()
