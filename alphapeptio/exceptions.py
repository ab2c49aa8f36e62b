"""Errors raised while reading identification result files.

All parse failures derive from :class:`ParseError`, itself a ``ValueError``,
so callers can catch the whole family at once. I/O errors are not wrapped.
"""

from typing import Iterable, Optional, Tuple


class ParseError(ValueError):
    """Base class for malformed identification files."""


class SchemaError(ParseError):
    """Mandatory header columns are missing (or there is no header at all)."""

    def __init__(self, message: str, missing: Iterable[str] = ()):
        super().__init__(message)
        self.missing: Tuple[str, ...] = tuple(missing)


class RowFormatError(ParseError):
    """A data row cannot be parsed (bad number, too few columns)."""

    def __init__(self, message: str, line_number: Optional[int] = None, line: Optional[str] = None):
        if line is not None:
            message = f"{message} (line {line_number}: {line})"
        super().__init__(message)
        self.line_number = line_number
        self.line = line


class ModificationGrammarError(ParseError):
    """A modification annotation does not follow the expected grammar."""

    def __init__(self, annotation: str, reason: str):
        super().__init__(f"Error parsing modification: {annotation} ({reason})")
        self.annotation = annotation
        self.reason = reason
