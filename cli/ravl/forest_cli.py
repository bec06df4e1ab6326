from __future__ import annotations

import json
from enum import Enum
from typing import Optional

import typer
from numpy.random import default_rng

from .options import resolve_balance_factors
from .support.workloads import run_forest


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"


def forest(
    cycles: int = typer.Option(100, "--cycles", min=1, help="Trees grown per balance factor."),
    nodes: int = typer.Option(200, "--nodes", "-n", min=1, help="Keys inserted per tree."),
    from_factor: int = typer.Option(1, "--from-bf", help="First balance factor."),
    to_factor: Optional[int] = typer.Option(10, "--to-bf", help="Last balance factor (inclusive)."),
    max_value: int = typer.Option(10_000_000, "--max-value", min=1, help="Largest key value."),
    seed: int = typer.Option(0, "--seed", help="Seed for the key generator."),
    output_format: OutputFormat = typer.Option(OutputFormat.TABLE, "--format", help="Output format."),
) -> None:
    """Compare tree height and rotation counts across balance factors."""

    try:
        factors = resolve_balance_factors(from_factor, to_factor)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    summaries = run_forest(
        default_rng(seed),
        cycles=cycles,
        nodes=nodes,
        max_value=max_value,
        balance_factors=factors,
    )
    if output_format is OutputFormat.JSON:
        typer.echo(json.dumps([summary.as_dict() for summary in summaries], indent=2, sort_keys=True))
        return

    typer.echo(f"{cycles} trees x {nodes} keys per balance factor")
    for summary in summaries:
        typer.echo(
            f"bf={summary.balance_factor:<3d} | "
            f"height mean={summary.height_mean:.2f} min={summary.height_min} max={summary.height_max} | "
            f"rotations mean={summary.rotations_mean:.1f} | "
            f"self-balances mean={summary.self_balances_mean:.1f}"
        )


__all__ = ["forest"]
