#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/logging_utils.py
"""Logging setup for the adfmd command-line entry point.

Library modules only create module-level loggers with
``logging.getLogger(__name__)``; handlers are installed here, once, by the
CLI. Debug output from the parser and renderers (block counts, flattened
line counts) is visible with ``--log-level DEBUG``.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

LOG_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_PLAIN_FORMAT = "%(levelname)s: %(message)s"
_TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"


def resolve_log_level(log_level: int | str) -> int:
    """Translate a level name or number into a numeric logging level.

    Unknown names resolve to ``logging.INFO``.
    """
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def _build_formatter(trace_mode: bool) -> logging.Formatter:
    if trace_mode:
        return logging.Formatter(_TRACE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    return logging.Formatter(_PLAIN_FORMAT)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure root logging handlers for the CLI.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name (e.g. ``"INFO"``).
    log_file : str, optional
        Path to a log file that receives a copy of every record.
    trace_mode : bool, default False
        Include timestamps and logger names in each record.

    Returns
    -------
    logging.Logger
        The configured root logger.

    """
    level = resolve_log_level(log_level)
    formatter = _build_formatter(trace_mode)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_error: OSError | None = None
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as exc:
            file_error = exc

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    if file_error is not None:
        root_logger.warning("Could not create log file %s: %s", log_file, file_error)
    elif log_file:
        root_logger.info("Logging to file: %s", log_file)

    return root_logger
