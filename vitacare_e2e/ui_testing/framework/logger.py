"""
================================================================================
Logging Setup
================================================================================

One Loguru configuration for the whole suite: a colored console sink plus an
optional rotating file sink, both driven by the `logging.*` config section.
The root conftest calls `init_logger()` during `pytest_configure`.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger

from .config_loader import get_config


DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "{name}:{function}:{line} | {message}"
)

_configured = False


def _sinks(level: str, fmt: str, log_file: str) -> List[Dict[str, Any]]:
    sinks: List[Dict[str, Any]] = [
        dict(sink=sys.stderr, level=level, format=fmt, colorize=True, backtrace=True, diagnose=False),
    ]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        sinks.append(dict(
            sink=log_file,
            level=level,
            # no padding in files
            format=fmt.replace("{level: <8}", "{level}"),
            rotation=get_config("logging.rotation", "10 MB"),
            retention=get_config("logging.retention", "7 days"),
            compression="zip",
        ))
    return sinks


def init_logger(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    format_str: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Route Loguru output to the configured sinks. Later calls are no-ops
    unless `force` is set.

    Args:
        level: Minimum level; falls back to `logging.level` (INFO).
        log_file: File sink path; falls back to `logging.file`, empty means none.
        format_str: Loguru format string for both sinks.
        force: Reconfigure even when already done.
    """
    global _configured
    if _configured and not force:
        return

    resolved_level = (level or get_config("logging.level", "INFO")).upper()
    sinks = _sinks(
        resolved_level,
        format_str or DEFAULT_FORMAT,
        log_file or get_config("logging.file", ""),
    )

    logger.remove()
    for options in sinks:
        logger.add(**options)

    _configured = True
    logger.debug(f"Logging at {resolved_level} to {len(sinks)} sink(s)")


__all__ = [
    "DEFAULT_FORMAT",
    "init_logger",
]
