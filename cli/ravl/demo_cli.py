from __future__ import annotations

from typing import Optional

import typer
from numpy.random import default_rng

from relaxavl import RelaxedAVLTree

from .support.echo import EchoCallbacks
from .support.workloads import Record, generate_keys, render_levels


def demo(
    nodes: int = typer.Option(10, "--nodes", "-n", min=1, help="How many random keys to insert."),
    balance_factor: int = typer.Option(1, "--balance-factor", "-b", min=1, help="Tolerated height difference."),
    seed: int = typer.Option(0, "--seed", help="Seed for the key generator."),
    max_value: Optional[int] = typer.Option(
        None, "--max-value", help="Largest key value (defaults to five times --nodes)."
    ),
    show_tree: bool = typer.Option(False, "--show-tree", help="Draw the top levels after inserting."),
    levels: int = typer.Option(5, "--levels", min=0, help="Levels drawn by --show-tree."),
    delete: bool = typer.Option(True, "--delete/--keep", help="Delete every key in random order at the end."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print the balancing diagnostics."),
) -> None:
    """Insert random integers, validate, traverse in order, then tear down."""

    rng = default_rng(seed)
    keys = generate_keys(rng, nodes, max_value=max_value or nodes * 5, mode="random")
    tree = RelaxedAVLTree(EchoCallbacks(), balance_factor, debug=verbose)

    typer.echo("Node inserts")
    duplicates = 0
    for key in keys:
        if tree.insert(Record(key)) is not None:
            duplicates += 1
    typer.echo(f"inserted {len(tree)} keys ({duplicates} duplicates skipped)")

    if show_tree:
        typer.echo("Tree")
        for line in render_levels(tree, levels):
            typer.echo(line)

    typer.echo("Validation and statistics")
    tree.validate(report_success=True)
    tree.statistics(report=True)

    typer.echo("Inorder traversal")
    cursor = tree.cursor(debug=False)
    for idx, record in enumerate(cursor, start=1):
        typer.echo(f"{idx}: {record.key}")

    if delete:
        typer.echo("Node deletes")
        for position in rng.permutation(len(keys)):
            tree.delete(Record(keys[int(position)]))
        tree.statistics(report=True)

    typer.echo("Cleanup")
    wiped = tree.clear()
    typer.echo(f"wiped {wiped} nodes")


__all__ = ["demo"]
