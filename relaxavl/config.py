from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

_SEVERITY_NAMES = {
    "error": 3,
    "warning": 4,
    "notice": 5,
    "info": 6,
    "debug": 7,
}
_BYTE_SUFFIXES = {
    "k": 1024,
    "m": 1024 ** 2,
    "g": 1024 ** 3,
}


def _bool_from_env(value: str | None, *, default: bool) -> bool:
    if value is None:
        return default
    value = value.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_optional_int(raw: str | None) -> int | None:
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid integer value '{raw}'") from exc


def parse_bytes(raw: str | int | None) -> int | None:
    """Convert sizes such as ``"200k"`` or ``"5M"`` into a byte count."""

    if raw is None:
        return None
    if isinstance(raw, int):
        return raw
    value = raw.strip()
    if not value:
        return None
    multiplier = _BYTE_SUFFIXES.get(value[-1].lower())
    if multiplier is not None:
        value = value[:-1]
    else:
        multiplier = 1
    try:
        amount = int(value)
    except ValueError as exc:
        raise ValueError(f"Invalid byte size '{raw}'") from exc
    if amount < 0:
        raise ValueError(f"Byte size must be non-negative, got '{raw}'")
    return amount * multiplier


def _normalise_balance_factor(raw: str | None) -> int:
    value = _parse_optional_int(raw)
    if value is None:
        return 1
    if value < 1:
        raise ValueError(f"Unsupported balance factor '{value}'. Expected an integer >= 1.")
    return value


def _normalise_severity(raw: str | None) -> int:
    if raw is None or raw.strip() == "":
        return _SEVERITY_NAMES["error"]
    value = raw.strip().lower()
    if value not in _SEVERITY_NAMES:
        raise ValueError(
            f"Unsupported severity '{value}'. Expected one of {sorted(_SEVERITY_NAMES)}."
        )
    return _SEVERITY_NAMES[value]


@dataclass(frozen=True)
class RuntimeConfig:
    log_level: str
    debug: bool
    balance_factor: int
    memory_threshold: int | None
    fatal_severity: int

    @property
    def memory_check_enabled(self) -> bool:
        return bool(self.memory_threshold)


def _configure_logging(level: str) -> None:
    logger = logging.getLogger("relaxavl")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        formatter = logging.Formatter("%(levelname)s %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)


@lru_cache(maxsize=None)
def runtime_config() -> RuntimeConfig:
    log_level = os.getenv("RELAXAVL_LOG_LEVEL", "INFO").upper()
    debug = _bool_from_env(os.getenv("RELAXAVL_DEBUG"), default=False)
    balance_factor = _normalise_balance_factor(os.getenv("RELAXAVL_BALANCE_FACTOR"))
    memory_threshold = parse_bytes(os.getenv("RELAXAVL_MEMORY_THRESHOLD"))
    fatal_severity = _normalise_severity(os.getenv("RELAXAVL_FATAL_SEVERITY"))

    config = RuntimeConfig(
        log_level=log_level,
        debug=debug,
        balance_factor=balance_factor,
        memory_threshold=memory_threshold,
        fatal_severity=fatal_severity,
    )
    _configure_logging(config.log_level)
    return config


def reset_runtime_config_cache() -> None:
    runtime_config.cache_clear()
