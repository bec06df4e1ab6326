"""Status codes, message catalogs, and the status/diagnostics plumbing.

Every public tree or cursor operation resets the instance status to ``OK``
and then reports what happened through :meth:`StatusReporter.report`. A
report is rendered from the instance's :class:`MessageCatalog`, recorded as
the current status when it is at least as severe as the one already held,
forwarded to the callbacks' ``diagnostic_message`` hook, and escalated to
``error_handler`` once its severity reaches the configured fatal threshold.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from importlib.metadata import PackageNotFoundError, version as _pkg_version
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Tuple, Union

if TYPE_CHECKING:  # pragma: no cover
    from .callbacks import TreeCallbacks


class Severity(IntEnum):
    """Syslog-style severities; lower values are more severe."""

    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7


class StatusCode(IntEnum):
    METHOD_CALLED = 1
    NODE_EXISTS = 2
    INSERTED_ROOT = 3
    INSERTED = 4
    HEIGHT_INCREASE = 5
    SELF_BALANCING = 6
    ROTATION = 7
    NOT_FOUND = 8
    FOUND = 9
    DELETED = 10
    HEIGHT_DECREASE = 11
    WIPED = 12
    PREV_FOUND = 13
    PREV_NOT_FOUND = 14
    NEXT_FOUND = 15
    NEXT_NOT_FOUND = 16
    OK = 100
    VERSION = 101
    EMPTY_TREE = 102
    NOT_ENOUGH_MEMORY = 103
    NO_CALLBACKS = 106
    INVALID_PAYLOAD = 107
    VALIDATION_OK = 1000
    VALIDATION_FAILED = 1001
    STATS_SHAPE = 1002
    STATS_OPERATIONS = 1003
    STATS_BALANCING = 1004


DEFAULT_MESSAGES: Mapping[int, Tuple[Severity, str]] = {
    StatusCode.METHOD_CALLED: (Severity.DEBUG, "{method} '{node}'"),
    StatusCode.NODE_EXISTS: (Severity.DEBUG, "node '{node}' exists already"),
    StatusCode.INSERTED_ROOT: (Severity.DEBUG, "inserted *root* node '{node}'; count: {count}"),
    StatusCode.INSERTED: (
        Severity.DEBUG,
        "inserted node '{node}' {direction} of node '{parent}'; count: {count}",
    ),
    StatusCode.HEIGHT_INCREASE: (
        Severity.DEBUG,
        "height increase in node '{node}'; new height: {height} new balance: {balance}",
    ),
    StatusCode.SELF_BALANCING: (
        Severity.DEBUG,
        "self-balancing in node '{node}'; new balance: {balance}",
    ),
    StatusCode.ROTATION: (Severity.DEBUG, "{rotation} rotation on node '{node}' (balance: {balance})"),
    StatusCode.NOT_FOUND: (Severity.DEBUG, "node '{node}' not found"),
    StatusCode.FOUND: (Severity.DEBUG, "node '{node}' found"),
    StatusCode.DELETED: (
        Severity.DEBUG,
        "deleted node '{node}',{node_type}; replacing node: {replace_by}; count: {count}",
    ),
    StatusCode.HEIGHT_DECREASE: (
        Severity.DEBUG,
        "height decrease in node '{node}'; new height: {height} new balance: {balance}",
    ),
    StatusCode.WIPED: (Severity.DEBUG, "Wiped {count} nodes while clearing tree"),
    StatusCode.PREV_FOUND: (Severity.DEBUG, "node '{node}' not found, closest previous '{match}'"),
    StatusCode.PREV_NOT_FOUND: (Severity.DEBUG, "node '{node}' not found, no closest previous"),
    StatusCode.NEXT_FOUND: (Severity.DEBUG, "node '{node}' not found, closest next '{match}'"),
    StatusCode.NEXT_NOT_FOUND: (Severity.DEBUG, "node '{node}' not found, no closest next"),
    StatusCode.OK: (Severity.INFO, "OK"),
    StatusCode.VERSION: (Severity.INFO, "{source} - Version {version}"),
    StatusCode.EMPTY_TREE: (Severity.WARNING, "Empty tree."),
    StatusCode.NOT_ENOUGH_MEMORY: (
        Severity.WARNING,
        "Not enough memory while inserting node '{node}'.",
    ),
    StatusCode.NO_CALLBACKS: (Severity.ERROR, "No callbacks specified when instantiating {source}"),
    StatusCode.INVALID_PAYLOAD: (
        Severity.WARNING,
        "Wrong or undefined payload passed to {source}.{method}. Only non-None payloads accepted.",
    ),
    StatusCode.VALIDATION_OK: (Severity.NOTICE, "Tree validation OK; nodes count: {count}"),
    StatusCode.VALIDATION_FAILED: (
        Severity.WARNING,
        "Tree validation *failed* on node: '{node}' "
        "({failure} failure; height: {height} balance: {balance})",
    ),
    StatusCode.STATS_SHAPE: (
        Severity.INFO,
        "Tree statistics: Balance factor {balance_factor}; Node count: {count}; Tree height: {height}",
    ),
    StatusCode.STATS_OPERATIONS: (
        Severity.INFO,
        "Tree statistics: Inserts: ({inserts}/{attempted_inserts}) "
        "Replaces: ({replaces}/{attempted_replaces}) Deletes: ({deletes}/{attempted_deletes})",
    ),
    StatusCode.STATS_BALANCING: (
        Severity.INFO,
        "Tree statistics: Self-balances: {self_balances}; Rotations: {rotations} "
        "(RR: {rr}, RL: {rl}, LL: {ll}, LR: {lr})",
    ),
}

DEFAULT_LABELS: Mapping[str, str] = {
    "none": "*none*",
    "right": "right",
    "left": "left",
    "root": "*root*",
    "leaf": "leaf",
    "height": "height",
    "balance": "balance",
    "no_left": "no left subtree",
    "no_right": "no right subtree",
    "successor_no_left": "no left child on right subtree '{node}'",
    "successor_left": "left child on right subtree '{node}'",
    "internal": "internal,",
}

VERSION_STATE = "beta"


def package_version() -> str:
    try:
        return _pkg_version("relaxavl")
    except PackageNotFoundError:  # pragma: no cover - best effort during local development
        return "0.1.0"


class _Placeholders(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def _render(template: str, params: Optional[Mapping[str, Any]]) -> str:
    if not params:
        return template
    return template.format_map(_Placeholders(params))


class MessageCatalog:
    """Per-instance table of status messages and labels.

    ``override`` only replaces entries that already exist, so a translated
    table cannot introduce unknown codes.
    """

    def __init__(
        self,
        messages: Optional[Mapping[int, Tuple[Severity, str]]] = None,
        labels: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._messages: Dict[int, Tuple[Severity, str]] = dict(DEFAULT_MESSAGES)
        self._labels: Dict[str, str] = dict(DEFAULT_LABELS)
        self.override(messages or {})
        self.override(labels or {})

    def override(self, table: Mapping[Union[int, str], Any]) -> "MessageCatalog":
        for key, entry in table.items():
            if isinstance(key, str) and key in self._labels:
                self._labels[key] = str(entry)
            elif isinstance(key, int) and key in self._messages:
                severity, text = entry
                self._messages[key] = (Severity(severity), text)
        return self

    def entry(self, code: int) -> Tuple[Severity, str]:
        return self._messages[code]

    def text(self, code: int, params: Optional[Mapping[str, Any]] = None) -> str:
        return _render(self._messages[code][1], params)

    def label(self, key: str, params: Optional[Mapping[str, Any]] = None) -> str:
        return _render(self._labels[key], params)

    def as_dict(self) -> Dict[Union[int, str], Any]:
        table: Dict[Union[int, str], Any] = dict(self._messages)
        table.update(self._labels)
        return table


@dataclass(frozen=True)
class TreeStatus:
    severity: Severity
    code: int
    params: Dict[str, Any] = field(default_factory=dict)


class TreeError(Exception):
    """Raised by the default error handler for fatal diagnostics."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code


class StatusReporter:
    """Shared status bookkeeping for trees and cursors."""

    def __init__(
        self,
        callbacks: Optional["TreeCallbacks"],
        *,
        debug: bool,
        messages: MessageCatalog,
        fatal_severity: int,
    ) -> None:
        self.callbacks = callbacks
        self.debug = debug
        self.messages = messages
        self.fatal_severity = fatal_severity
        self._status = TreeStatus(Severity.NOTICE, StatusCode.OK)

    @property
    def status(self) -> TreeStatus:
        return self._status

    @property
    def status_message(self) -> str:
        params = dict(self._status.params)
        params.setdefault("source", type(self).__name__)
        return self.messages.text(self._status.code, params)

    def reset_status(self) -> None:
        self.report(StatusCode.OK, reset=True)

    def report(
        self,
        code: int,
        params: Optional[Mapping[str, Any]] = None,
        *,
        reset: bool = False,
    ) -> None:
        severity, template = self.messages.entry(code)
        if severity == Severity.DEBUG and not self.debug:
            return
        params = dict(params or {})
        if reset or severity <= self._status.severity:
            self._status = TreeStatus(severity, code, dict(params))

        source = type(self).__name__
        params["source"] = source
        qualified = _render(template, params)
        fatal = not reset and severity <= self.fatal_severity
        if self.callbacks is None:
            if fatal:
                raise TreeError(code, qualified)
            return
        if not reset:
            self.callbacks.diagnostic_message(severity, code, template, params, qualified, source)
        if fatal:
            self.callbacks.error_handler(code, template, params, qualified, source)

    def dump(self, payload: Any) -> str:
        return self.callbacks.dump(payload)

    def check_payload(self, payload: Any, method: str) -> bool:
        if payload is None:
            self.report(StatusCode.INVALID_PAYLOAD, {"method": method})
            return False
        if self.debug:
            self.report(StatusCode.METHOD_CALLED, {"method": method, "node": self.dump(payload)})
        return True

    def version(self, report: bool = False) -> Tuple[str, str]:
        self.reset_status()
        number = package_version()
        if report:
            self.report(StatusCode.VERSION, {"version": f"{number}{VERSION_STATE}"})
        return number, VERSION_STATE


__all__ = [
    "DEFAULT_LABELS",
    "DEFAULT_MESSAGES",
    "MessageCatalog",
    "Severity",
    "StatusCode",
    "StatusReporter",
    "TreeError",
    "TreeStatus",
    "package_version",
]
