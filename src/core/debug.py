# src/core/debug.py
"""
Debug logging helpers for the goal-seek engine.

Tracing is off by default. Set XIRR_DEBUG=1 to write every Newton iteration
to a rotating log file (logs/xirr_debug.log). The path can be moved with
XIRR_DEBUG_LOG.

XIRR_DEBUG is read on every trace() call, so tracing can be switched on and
off in a running process. XIRR_DEBUG_LOG is read once, when the logger is
first built; later changes need a new process.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

_LOGGER: logging.Logger | None = None


def debug_enabled() -> bool:
    return os.getenv("XIRR_DEBUG", "").strip().lower() in {"1", "true", "yes", "on"}


def get_debug_logger() -> logging.Logger:
    """Create/reuse a rotating file logger for goal-seek traces."""
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER

    logger = logging.getLogger("xirr_debug")
    logger.setLevel(logging.DEBUG)

    # Avoid duplicate handlers if reloaded in REPL/tests
    if not logger.handlers:
        log_path = os.getenv("XIRR_DEBUG_LOG") or os.path.join("logs", "xirr_debug.log")
        try:
            os.makedirs(os.path.dirname(log_path) or ".", exist_ok=True)
            handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
            handler.setFormatter(
                logging.Formatter(
                    fmt="%(asctime)s %(levelname)s %(message)s",
                    datefmt="(%Y-%m-%d %H:%M:%S)",
                )
            )
            logger.addHandler(handler)
        except OSError:
            # Unwritable log dir: the logger still propagates to the root logger.
            pass

    _LOGGER = logger
    return logger


def trace(msg: str, *args: object) -> None:
    """Log a %-style message to the debug log when XIRR_DEBUG is on."""
    if not debug_enabled():
        return
    get_debug_logger().debug(msg, *args)


__all__ = ["debug_enabled", "get_debug_logger", "trace"]
