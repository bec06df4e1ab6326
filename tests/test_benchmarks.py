import json
from types import SimpleNamespace

from benchmarks.batch_ops import (
    BATCH_OPS_RESULT_SCHEMA_ID,
    _write_result_artifact,
    benchmark_delete,
    benchmark_insert,
)
from relaxavl.algo import validate_subtree


def test_benchmark_insert_delete_smoke():
    tree, keys, insert_result = benchmark_insert(
        balance_factor=2,
        batch_size=16,
        batches=3,
        seed=0,
    )
    assert insert_result.mode == "insert"
    assert insert_result.operations == 48
    assert len(tree) == len(keys)
    assert insert_result.height == tree.root.height
    assert validate_subtree(tree.root, 2) is None

    tree, delete_result = benchmark_delete(tree, keys, batch_size=8, batches=2, seed=1)
    assert delete_result.mode == "delete"
    assert delete_result.batches == 2
    assert delete_result.operations == 16
    assert len(tree) == len(keys) - 16
    assert validate_subtree(tree.root, 2) is None


def test_benchmark_delete_stops_when_tree_runs_out():
    tree, keys, _ = benchmark_insert(balance_factor=1, batch_size=4, batches=1, seed=5)
    tree, result = benchmark_delete(tree, keys, batch_size=4, batches=5, seed=0)
    assert result.batches == 1
    assert len(tree) == 0
    assert result.height == -1


def test_write_result_artifact(tmp_path):
    _, _, result = benchmark_insert(balance_factor=1, batch_size=4, batches=1, seed=0)
    path = tmp_path / "out" / "batch.json"
    args = SimpleNamespace(seed=0, bootstrap_batches=3)

    _write_result_artifact(path, run_id="run-1", args=args, result=result)

    payload = json.loads(path.read_text())
    assert payload["schema_id"] == BATCH_OPS_RESULT_SCHEMA_ID
    assert payload["run_id"] == "run-1"
    assert payload["result"]["operations"] == 4
    assert payload["runtime"]["balance_factor"] >= 1
