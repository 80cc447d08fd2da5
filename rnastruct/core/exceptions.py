"""Error types raised while reading structure files.

Every failure of a format's ``read`` is one of these, so callers can tell a
malformed record apart from a misuse of the buffers or a truncated stream.
"""

from __future__ import annotations

from typing import Optional


class StructureFileError(Exception):
    """Base class for errors raised by structure file formats."""


class ParseError(StructureFileError, ValueError):
    """The stream content does not match the format's grammar."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class NumericOverflowError(ParseError, OverflowError):
    """A numeric field does not fit its target type."""


class BufferShapeError(StructureFileError, TypeError):
    """The buffers passed to ``read`` disagree with the input options."""


class UnexpectedEndOfInput(StructureFileError, EOFError):
    """The stream ended in the middle of a record."""


class NoFieldsRequestedError(StructureFileError, ValueError):
    """Every field was discarded, so there is nothing to read."""


class ValidationError(ValueError):
    """A value was rejected by an argument validator."""
