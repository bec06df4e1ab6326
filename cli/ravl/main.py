from __future__ import annotations

import typer

from .demo_cli import demo
from .forest_cli import forest
from .words_cli import words


_HELP = """Relaxed AVL tree (relaxavl) command line interface.

Subcommands walk through small demonstrations and balance-factor sweeps."""

app = typer.Typer(
    add_completion=False,
    pretty_exceptions_enable=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
    help=_HELP,
)


@app.callback()
def ravl_callback() -> None:
    """Root callback reserved for shared options (none yet)."""
    pass


app.command("demo", help="Insert, validate, traverse, and delete random keys.")(demo)
app.command("forest", help="Summarise heights and rotations across balance factors.")(forest)
app.command("words", help="Index the words of a text and list them in order.")(words)


def main() -> None:
    app()


__all__ = ["app", "main"]
