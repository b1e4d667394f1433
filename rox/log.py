"""Console diagnostics for Rox.

The scanner, parser and CLI report user-facing problems through a `Log`.
Messages go to stderr, colored by severity; anything below the
configured level is dropped.
"""

import sys
from enum import IntEnum
from typing import Optional, TextIO

from termcolor import colored


class LogLevel(IntEnum):
    DEBUG = 0
    WARNING = 1
    ERROR = 2


class Log:
    ERROR = "red"
    WARNING = "magenta"
    DEBUG = "white"

    def __init__(self, level: LogLevel = LogLevel.WARNING, stream: Optional[TextIO] = None):
        self.level = level
        self.stream = stream

    def _write(self, message: str, color: str, attrs=None):
        stream = self.stream if self.stream is not None else sys.stderr
        print(colored(message, color, attrs=attrs), file=stream)

    def error(self, message: str):
        if self.level <= LogLevel.ERROR:
            self._write(message, self.ERROR)

    def warning(self, message: str):
        if self.level <= LogLevel.WARNING:
            self._write(message, self.WARNING)

    def debug(self, message: str):
        if self.level <= LogLevel.DEBUG:
            self._write(message, self.DEBUG, attrs=["dark"])
