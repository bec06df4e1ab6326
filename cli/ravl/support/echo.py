from __future__ import annotations

from typing import Any, Dict, Optional

import typer

from relaxavl import Severity

from .workloads import RecordCallbacks


class EchoCallbacks(RecordCallbacks):
    """Print every diagnostic the tree emits, one line each."""

    def diagnostic_message(
        self,
        severity: int,
        code: int,
        text: str,
        params: Dict[str, Any],
        qualified_text: str,
        source: Optional[str] = None,
    ) -> None:
        prefix = Severity(severity).name.lower()
        typer.echo(f"  {prefix}: {qualified_text}")


__all__ = ["EchoCallbacks"]
