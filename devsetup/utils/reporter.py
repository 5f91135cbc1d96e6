"""
Line-oriented status output for a provisioning run.
"""

import logging
import sys
from typing import TextIO, Optional

logger = logging.getLogger(__name__)


class StatusReporter:
    """Prints one prefixed status line per tool per phase and logs it."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout
        self.lines: list[str] = []

    def _emit(self, tag: str, message: str, level: int) -> None:
        line = f"[{tag}] {message}"
        self.lines.append(line)
        self.stream.write(line + "\n")
        self.stream.flush()
        logger.log(level, message)

    def step(self, message: str) -> None:
        self._emit("STEP", message, logging.INFO)

    def info(self, message: str) -> None:
        self._emit("INFO", message, logging.INFO)

    def warning(self, message: str) -> None:
        self._emit("WARNING", message, logging.WARNING)

    def error(self, message: str) -> None:
        self._emit("ERROR", message, logging.ERROR)

    def blank(self) -> None:
        self.stream.write("\n")
