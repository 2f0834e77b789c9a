"""
Logging for the profilectl package logger.

Records go to stderr and, when the state dir is writable, to a rotating
profilectl.log there. The level comes from the caller, then
PROFILECTL_LOG_LEVEL, then INFO. Calling setup_logging again replaces the
handlers instead of stacking them.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

from .platform import log_path


LOGGER_NAME = "profilectl"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LEVEL_ENV = "PROFILECTL_LOG_LEVEL"


def _resolve_level(level_name: Optional[str]) -> int:
    name = (level_name or os.environ.get(LEVEL_ENV) or "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _build_handlers(log_file: Path) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=3, encoding="utf-8"))
    except OSError as e:
        # Read-only home or similar; console output still works.
        print(f"profilectl: file logging disabled ({e})", file=sys.stderr)
    return handlers


def setup_logging(level_name: Optional[str] = None) -> logging.Logger:
    level = _resolve_level(level_name)
    log_file = log_path()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    fmt = logging.Formatter(LOG_FORMAT)
    for handler in _build_handlers(log_file):
        handler.setLevel(level)
        handler.setFormatter(fmt)
        logger.addHandler(handler)

    logger.debug("logging.init ok level=%s file=%s", logging.getLevelName(level), log_file)
    return logger
