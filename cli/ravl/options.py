from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from relaxavl import MessageCatalog, Severity


def resolve_balance_factors(from_factor: int, to_factor: Optional[int]) -> List[int]:
    """Return the inclusive range of balance factors requested on the CLI."""

    upper = from_factor if to_factor is None else to_factor
    if from_factor < 1:
        raise ValueError(f"Balance factors start at 1, got {from_factor}.")
    if upper < from_factor:
        raise ValueError(f"Empty balance factor range {from_factor}..{upper}.")
    return list(range(from_factor, upper + 1))


def load_message_catalog(path: Optional[Path]) -> Optional[MessageCatalog]:
    """Read a JSON message table: numeric codes map to ``[severity, text]``, labels to text."""

    if path is None:
        return None
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"Cannot read message table '{path}': {exc}") from exc
    if not isinstance(raw, dict):
        raise ValueError(f"Message table '{path}' must be a JSON object.")
    table: Dict[Union[int, str], Any] = {}
    for key, entry in raw.items():
        if key.isdigit():
            try:
                severity, text = entry
                table[int(key)] = (Severity(int(severity)), str(text))
            except (TypeError, ValueError) as exc:
                raise ValueError(
                    f"Message '{key}' in '{path}' must be [severity, text], got {entry!r}."
                ) from exc
        else:
            table[key] = str(entry)
    return MessageCatalog().override(table)


__all__ = ["load_message_catalog", "resolve_balance_factors"]
