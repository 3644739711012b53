from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str | int = "WARNING", *, stream: Optional[TextIO] = None) -> logging.Logger:
    """Configure the ``semgrep_triage`` logger and return it.

    Logs go to stderr by default because stdout carries the display protocol.
    Calling this again replaces the handler installed by the previous call.
    """

    if isinstance(level, str):
        log_level = _LEVELS.get(level.strip().upper(), logging.WARNING)
    else:
        log_level = int(level)

    logger = logging.getLogger("semgrep_triage")
    for handler in list(logger.handlers):
        if getattr(handler, "_semgrep_triage", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler._semgrep_triage = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(log_level)
    return logger
