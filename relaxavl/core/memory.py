from __future__ import annotations

from dataclasses import dataclass

import psutil


def available_memory() -> int:
    """Bytes of memory the OS can hand out without swapping."""
    return int(psutil.virtual_memory().available)


@dataclass(frozen=True)
class MemoryProbe:
    """Pre-insert capacity check against a free-memory floor."""

    threshold: int

    def exhausted(self) -> bool:
        return available_memory() < self.threshold


__all__ = ["MemoryProbe", "available_memory"]
