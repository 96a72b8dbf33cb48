"""Minimal levelled logging to standard output."""

from __future__ import annotations

import sys
from enum import Enum


class LogLevel(Enum):
    """Severity of a log line, valued by the label that is printed."""

    INFO = "INFO"
    WARNING = "WARN"
    ERROR = "ERROR"


def log(level: LogLevel, msg: str) -> None:
    """Print ``msg`` prefixed by the bracketed label of ``level``."""
    print(f"[{level.value}] {msg}", file=sys.stdout, flush=True)