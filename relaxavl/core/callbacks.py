from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

from relaxavl.core.diagnostics import Severity, TreeError
from relaxavl.logging import get_logger

_LOG_LEVELS = {
    Severity.ERROR: logging.ERROR,
    Severity.WARNING: logging.WARNING,
    Severity.NOTICE: logging.INFO,
    Severity.INFO: logging.INFO,
    Severity.DEBUG: logging.DEBUG,
}


class TreeCallbacks(ABC):
    """Comparison, display, and diagnostics hooks injected into a tree.

    Subclasses must implement :meth:`compare`. The remaining hooks default to
    ``repr`` for display, logging for diagnostics, and raising
    :class:`TreeError` for fatal events.
    """

    @abstractmethod
    def compare(self, a: Any, b: Any) -> int:
        """Return a negative, zero, or positive number for a < b, a == b, a > b."""

    def dump(self, payload: Any) -> str:
        return repr(payload)

    def diagnostic_message(
        self,
        severity: int,
        code: int,
        text: str,
        params: Dict[str, Any],
        qualified_text: str,
        source: Optional[str] = None,
    ) -> None:
        logger = get_logger("tree")
        logger.log(_LOG_LEVELS.get(Severity(severity), logging.INFO), "[%d] %s", code, qualified_text)

    def error_handler(
        self,
        code: int,
        text: str,
        params: Dict[str, Any],
        qualified_text: str,
        source: Optional[str] = None,
    ) -> None:
        raise TreeError(code, qualified_text)


class KeyCallbacks(TreeCallbacks):
    """Order payloads by ``key(payload)`` using the natural ordering of the keys."""

    def __init__(self, key: Callable[[Any], Any] = lambda payload: payload) -> None:
        self.key = key

    def compare(self, a: Any, b: Any) -> int:
        left, right = self.key(a), self.key(b)
        if left == right:
            return 0
        return -1 if left < right else 1

    def dump(self, payload: Any) -> str:
        return str(self.key(payload))


__all__ = ["KeyCallbacks", "TreeCallbacks"]
