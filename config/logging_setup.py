"""Logging configuration driven by ``Settings.log_level``."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from config.settings import get_settings

PACKAGE_LOGGERS = ("snapshot_engine", "store", "snapshot_plugin", "reporting")


def _parse_log_level(raw_level: str | None, fallback: int = logging.INFO) -> int:
    if not raw_level:
        return fallback
    level = logging.getLevelName(raw_level.strip().upper())
    return level if isinstance(level, int) else fallback


def configure_logging(level: str | None = None, *, rich_output: bool = False) -> int:
    """
    Apply the configured level to the package loggers.

    With ``rich_output`` a ``RichHandler`` is attached to the root logger,
    which is what the CLI wants. Inside pytest the runner's own log capture
    is left alone.
    """
    resolved = _parse_log_level(level or get_settings().log_level)
    for name in PACKAGE_LOGGERS:
        logging.getLogger(name).setLevel(resolved)

    if rich_output:
        logging.basicConfig(
            level=resolved,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        )
    return resolved
