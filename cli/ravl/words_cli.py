from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from relaxavl import KeyCallbacks, RelaxedAVLTree

from .options import load_message_catalog
from .support.workloads import LOREM_IPSUM, split_words


class _WordCallbacks(KeyCallbacks):
    def __init__(self) -> None:
        super().__init__(key=str.casefold)

    def diagnostic_message(self, severity, code, text, params, qualified_text, source=None) -> None:
        typer.echo(f"  {qualified_text}")


def words(
    text: Optional[str] = typer.Argument(None, help="Text to index (defaults to Lorem ipsum)."),
    balance_factor: int = typer.Option(1, "--balance-factor", "-b", min=1, help="Tolerated height difference."),
    messages: Optional[Path] = typer.Option(
        None, "--messages", exists=True, dir_okay=False, help="JSON message table overriding the defaults."
    ),
) -> None:
    """Index the words of a text, case-insensitively, and list them in order."""

    try:
        catalog = load_message_catalog(messages)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--messages") from exc

    tree = RelaxedAVLTree(_WordCallbacks(), balance_factor, messages=catalog)
    repeated = 0
    for word in split_words(LOREM_IPSUM if text is None else text):
        if tree.insert(word) is not None:
            repeated += 1

    tree.validate(report_success=True)
    typer.echo(f"{len(tree)} distinct words, {repeated} repeated")
    typer.echo(" ".join(tree))
    tree.statistics(report=True)


__all__ = ["words"]
