"""Logging setup for demos and embedding applications.

The engine logs every published step at DEBUG.  At the 100 ms sampling
cadence that drowns everything else, so step tracing is opt-in and kept
separate from the package level.
"""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "glv_colony"
STEP_LOGGER = "glv_colony.simulation.engine"

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"unknown logging level {level!r}")
    return resolved


def setup_logging(
    level: int | str = logging.INFO,
    log_file: str | None = None,
    *,
    trace_steps: bool = False,
) -> logging.Logger:
    """Attach console (and optional file) handlers to the package logger.

    Parameters
    ----------
    level:
        Level for the ``glv_colony`` logger, as a number or a name such
        as ``"debug"``.
    log_file:
        Optional path; the file is truncated on each call.
    trace_steps:
        Emit the per-step population trace even when *level* is DEBUG.
        Without it the engine logger is held at INFO.
    """
    level = _resolve_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Repeat calls (e.g. rerunning a demo in one interpreter) replace handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(_FORMAT, datefmt="%H:%M:%S")
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    step_logger = logging.getLogger(STEP_LOGGER)
    step_logger.setLevel(logging.NOTSET if trace_steps else max(level, logging.INFO))

    logger.info("Logging initialized at %s.", logging.getLevelName(level))
    return logger
