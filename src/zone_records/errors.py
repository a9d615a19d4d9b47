"""Exceptions raised while reading zone data."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .stream import StringStream


class ZoneError(ValueError):
    """Base class for every error raised by this package."""


class RecordSyntaxError(ZoneError):
    """A resource record line does not match the record grammar.

    Attributes:
        reason: Short description of what went wrong.
        position: Offset of the cursor in the source text.
        line: 1-based line of the failure.
        column: 1-based column of the failure.
        context: Excerpt of the source around the failure.
    """

    def __init__(self, stream: StringStream, reason: str = "syntax error") -> None:
        """Capture the cursor location of the failure.

        Args:
            stream: Cursor left where parsing failed.
            reason: Short description of what went wrong.
        """
        self.reason = reason
        self.position = stream.position
        self.line = stream.line
        self.column = stream.column
        self.context = stream.context()
        super().__init__(
            f"{reason} at line {self.line}, column {self.column}: {self.context!r}"
        )


class RDataSyntaxError(RecordSyntaxError):
    """Type specific data of a record could not be parsed."""


class DirectiveError(ZoneError):
    """Malformed or unsupported ``$`` directive."""
