"""
Terminal geometry and ANSI colour helpers.
"""

from typing import Optional, TextIO

import os
import re
import sys

from enum import Enum

# Used when the terminal width can't be determined
DEFAULT_COLUMNS = 80

# ANSI escape sequences
RESET = "\033[0m"

# Matches CSI sequences, e.g. "\033[31m" or "\033[2J"
ANSI_ESCAPE = re.compile(r"\033\[[0-?]*[ -/]*[@-~]")


class Color(Enum):
    red = "\033[31m"
    green = "\033[32m"
    blue = "\033[34m"
    aqua = "\033[36m"
    white = "\033[37m"

    def wrap(self, text: str) -> str:
        return f"{self.value}{text}{RESET}"


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE.sub("", text)


def visible_width(text: str) -> int:
    """
    The number of character positions the text occupies on a terminal,
    ignoring any ANSI escape sequences. Every other character counts as one
    column.
    """
    return len(strip_ansi(text))


def terminal_columns(stream: TextIO = sys.stdout) -> Optional[int]:
    """
    Return the width (in columns) of the terminal attached to stream, or None
    if it is not a terminal or its size could not be determined.
    """
    try:
        columns = os.get_terminal_size(stream.fileno()).columns
    except (AttributeError, ValueError, OSError):
        # No fileno (e.g. a StringIO), closed stream or not a tty
        return None

    return columns or None


def stream_is_terminal(stream: TextIO = sys.stdout) -> bool:
    try:
        return stream.isatty()
    except ValueError:  # Closed
        return False
