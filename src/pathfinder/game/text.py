"""Terminal output and ANSI color helpers for the text player."""

import re
import sys
from typing import Final, TextIO

# ANSI color codes
ANSI_COLORS: Final[dict[str, str]] = {
    "RED": "\x1b[31m",
    "GREEN": "\x1b[32m",
    "YELLOW": "\x1b[33m",
    "CYAN": "\x1b[36m",
    "RESET": "\x1b[0m",
    "BOLD": "\x1b[1m",
    "DIM": "\x1b[2m",
}

ANSI_ESCAPE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\x1b\[[0-9;]*m")


def colorize(text: str, color: str) -> str:
    """
    Apply ANSI color to text.

    Args:
        text: The text to colorize
        color: Color name from ANSI_COLORS (e.g., 'RED', 'GREEN')

    Returns:
        Text wrapped with ANSI color codes
    """
    color_code = ANSI_COLORS.get(color.upper(), "")
    if not color_code:
        return text
    return f"{color_code}{text}{ANSI_COLORS['RESET']}"


def strip_ansi(text: str) -> str:
    """Remove ANSI escape codes from text."""
    return ANSI_ESCAPE_PATTERN.sub("", text)


class Console:
    """
    Line-oriented output for the text player.

    Colors are stripped when the stream is not a terminal or color is off.
    """

    def __init__(self, stream: TextIO | None = None, color: bool | None = None) -> None:
        self.stream = stream or sys.stdout
        if color is None:
            color = bool(getattr(self.stream, "isatty", lambda: False)())
        self.color = color

    def send_line(self, text: str = "") -> None:
        """Write one line of output."""
        if not self.color:
            text = strip_ansi(text)
        self.stream.write(text + "\n")
        self.stream.flush()
