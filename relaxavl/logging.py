"""Loggers for relaxavl, named ``relaxavl[.name]`` and levelled by `RuntimeConfig`.

Tree diagnostics routed through the default callbacks land on the
``relaxavl.tree`` channel; set ``RELAXAVL_LOG_LEVEL=DEBUG`` together with a
debug-mode tree to see balancing events.
"""

from __future__ import annotations

import logging
from typing import Optional

from . import config as ravl_config


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the package logger, or its ``name`` child, at the configured level."""

    logger_name = "relaxavl" if name is None else f"relaxavl.{name}"
    runtime = ravl_config.runtime_config()
    logger = logging.getLogger(logger_name)
    logger.setLevel(runtime.log_level)
    return logger
