"""Operator-facing console lines.

Each line is ``<symbol> <message>``; the symbol is ANSI-colored when
color is enabled. Color is off with ``--no-color``, when ``NO_COLOR`` is
set, or when the stream is not a TTY (unless ``FORCE_COLOR`` is set).
"""

import os
import sys
from typing import TextIO

RESET = "\033[0m"
BOLD = "\033[1m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
CYAN = "\033[36m"

INFO_SYMBOL = "ℹ "
WARN_SYMBOL = "⚠ "
OK_SYMBOL = "✅ "
STEP_SYMBOL = "▶ "
ERROR_SYMBOL = "❌ "


def color_supported(stream: TextIO) -> bool:
    """Decide whether ANSI color should be used on ``stream``."""
    if os.environ.get("NO_COLOR") is not None:
        return False
    if os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}:
        return True
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class Console:
    """Prints symbol-prefixed status lines."""

    def __init__(self, color: bool = True, stream: TextIO | None = None):
        self.stream = stream if stream is not None else sys.stdout
        self.color = color and color_supported(self.stream)

    def _wrap(self, code: str, text: str) -> str:
        if not self.color:
            return text
        return f"{code}{text}{RESET}"

    def _emit(self, code: str, symbol: str, message: str) -> None:
        print(self._wrap(code, symbol), message, file=self.stream, flush=True)

    def info(self, message: str) -> None:
        self._emit(CYAN, INFO_SYMBOL, message)

    def warn(self, message: str) -> None:
        self._emit(YELLOW, WARN_SYMBOL, message)

    def ok(self, message: str) -> None:
        self._emit(GREEN, OK_SYMBOL, message)

    def step(self, message: str) -> None:
        self._emit(BOLD, STEP_SYMBOL, message)

    def error(self, message: str) -> None:
        self._emit(RED, ERROR_SYMBOL, message)
