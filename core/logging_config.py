# guest_config_agent/core/logging_config.py
from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from core.clock import now

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class ClockFormatter(logging.Formatter):
    """Formatter whose ``asctime`` is the adjtimex-backed clock."""

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        return now()


def configure_logging(level: str | int = 'INFO', stream: Optional[TextIO] = None) -> logging.Handler:
    """Install a single clock-stamped handler on the root logger."""
    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(ClockFormatter(LOG_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)
    return handler


def stream_for(name: str) -> TextIO:
    return sys.stderr if name == 'stderr' else sys.stdout
