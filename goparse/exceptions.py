"""
Errors raised by the Go declaration extractor.

Only units the front-end cannot structure are errors. Declarations that do
not match an extractor's shape are reported as ``None`` by the extractors.
"""

from typing import Optional


class GoParseError(Exception):
    """Base class for extraction errors."""


class UnparseableUnitError(GoParseError):
    """A file or directory could not be read or structured.

    Attributes:
        path: The offending file or directory.
        reason: Human readable cause.
        error_count: Number of ERROR/MISSING nodes, when a tree was built.
    """

    def __init__(self, path: str, reason: str, error_count: Optional[int] = None):
        self.path = path
        self.reason = reason
        self.error_count = error_count
        super().__init__(f"Cannot parse {path}: {reason}")


class InvalidFilenamePatternError(GoParseError, ValueError):
    """The filename filter is not a valid regular expression."""

    def __init__(self, pattern: str, detail: str):
        self.pattern = pattern
        super().__init__(f"Invalid filename pattern {pattern!r}: {detail}")
