"""Errors raised while converting localization files."""

from typing import Optional


class LocalizationError(Exception):
    """Base class for errors raised by stringscsv."""


class ParseError(LocalizationError):
    """Malformed .strings or CSV content.

    Attributes:
        path: File (or stream name) being decoded.
        line: 1-indexed line where the problem was found.
        reason: Short description of the problem.
    """

    def __init__(self, reason: str, path: str = "<input>", line: Optional[int] = None):
        self.reason = reason
        self.path = path
        self.line = line
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.line is None:
            return f"{self.path}: {self.reason}"
        return f"{self.path}:{self.line}: {self.reason}"
