"""Reading every record of a zone text."""
from __future__ import annotations

import logging
from typing import Any, Iterator

from .errors import DirectiveError, RDataSyntaxError, RecordSyntaxError
from .rdata import read_rdata_text
from .record import tokenize
from .records import ParseContext, Record, parse_ttl
from .stream import StringStream

logger = logging.getLogger(__name__)


class ZoneReader:
    """Iterate over the records of a zone file.

    Handles blank and comment lines, the ``$ORIGIN`` and ``$TTL`` directives
    and hands each record line to the record tokenizer with the context
    inherited from the records before it.

    Leading indentation is skipped before a line is tokenized, so it carries
    no meaning of its own: an indented line inherits the owner name only when
    the tokenizer finds the name missing. Under a zone TTL an indented
    ``7200 A 192.0.2.2`` or ``7200 IN A 192.0.2.2`` keeps ``7200`` as its owner
    name, so a record with its own TTL must spell out its owner name.

    Args:
        text: Zone file contents.
        origin: Initial origin, overridden by ``$ORIGIN``.
        ttl: Initial zone TTL, overridden by ``$TTL``.
        relative_to_origin: Emit owner names relative to the origin.
        skip_errors: Log and skip malformed records instead of raising.

    Attributes:
        origin: Current origin.
        ttl: Current zone TTL (from ``$TTL`` or the constructor).
        skipped: Number of records skipped because of errors.
    """

    def __init__(
        self,
        text: str,
        origin: str | None = None,
        ttl: str | None = None,
        relative_to_origin: bool = False,
        skip_errors: bool = False,
    ) -> None:
        """Initialize the reader; see the class docstring for the arguments."""
        self.text = text
        self.origin = origin
        self.ttl = ttl
        self.relative_to_origin = relative_to_origin
        self.skip_errors = skip_errors
        self.skipped = 0
        self._previous: Record | None = None
        self._previous_ttl: str | None = None

    def __iter__(self) -> Iterator[Record]:
        """Iterate over the records; same as `records`."""
        return self.records()

    def records(self) -> Iterator[Record]:
        """Yield records in file order.

        Raises:
            RecordSyntaxError: On a malformed record unless `skip_errors` is set.
            DirectiveError: On a malformed or unsupported directive.
        """
        stream = StringStream(self.text)
        count = 0
        while True:
            stream.ignore_horizontal_space()
            if stream.is_eof():
                break
            char = stream.current()

            if char in "\r\n;":
                self._next_line(stream)
                continue

            if char == "$":
                line = stream.line
                self._directive(stream.read_until_line_end(), line)
                self._next_line(stream)
                continue

            line = stream.line
            try:
                record = self._read_record(stream, line)
            except RecordSyntaxError as exc:
                if not self.skip_errors:
                    logger.error("%s", exc)
                    raise
                logger.warning("skipping record: %s", exc)
                self.skipped += 1
                self._skip_record(stream)
                self._next_line(stream)
                continue

            count += 1
            yield record
            self._next_line(stream)

        logger.info("zone read: %d records, %d skipped", count, self.skipped)

    def _context(self) -> ParseContext:
        """Build the context inherited by the next record.

        Returns:
            Context with the current origin, zone TTL and previous record.
        """
        return ParseContext(
            global_origin=self.origin,
            global_ttl=self.ttl or self._previous_ttl,
            is_first=self._previous is None,
            previous_name=self._previous.name if self._previous else None,
            relative_to_origin=self.relative_to_origin,
        )

    def _read_record(self, stream: StringStream, line: int) -> Record:
        """Tokenize one record and remember it as context for the next.

        Args:
            stream: Cursor on the first character of the record.
            line: Line the record starts on.

        Returns:
            The parsed record.

        Raises:
            RecordSyntaxError: If the record or its TTL is malformed.
        """
        fields = tokenize(stream, self._context())
        try:
            record = Record.from_fields(fields, line)
        except ValueError as exc:
            raise RecordSyntaxError(stream, f"invalid TTL {fields.ttl!r}") from exc
        logger.debug("line %d: %s", line, record.to_zone())
        self._previous = record
        self._previous_ttl = fields.ttl
        return record

    def _directive(self, text: str, line: int) -> None:
        """Apply a ``$ORIGIN`` or ``$TTL`` directive.

        Args:
            text: Directive line.
            line: Line number, for error messages.

        Raises:
            DirectiveError: On a malformed or unsupported directive.
        """
        words = text.partition(";")[0].split()
        keyword, args = words[0], words[1:]
        if keyword not in ("$ORIGIN", "$TTL"):
            raise DirectiveError(f"line {line}: unsupported directive {keyword}")
        if len(args) != 1:
            raise DirectiveError(f"line {line}: {keyword} takes exactly one argument")

        if keyword == "$TTL":
            try:
                parse_ttl(args[0])
            except ValueError as exc:
                raise DirectiveError(f"line {line}: {exc}") from exc
            self.ttl = args[0]
        else:
            self.origin = self._absolute_origin(args[0], line)
        logger.debug("line %d: %s %s", line, keyword, args[0])

    def _absolute_origin(self, name: str, line: int) -> str:
        """Complete a ``$ORIGIN`` argument against the current origin.

        Raises:
            DirectiveError: If a relative name is given without an origin.
        """
        if name.endswith("."):
            return name
        if not self.origin:
            raise DirectiveError(f"line {line}: relative $ORIGIN {name} without an origin")
        if self.origin == ".":
            return f"{name}."
        return f"{name}.{self.origin}"

    @staticmethod
    def _skip_record(stream: StringStream) -> None:
        """Move past the rest of a failed record, continuation lines included.

        Args:
            stream: Cursor left where the record failed.
        """
        try:
            read_rdata_text(stream)
        except RDataSyntaxError:
            stream.read_until_line_end()

    @staticmethod
    def _next_line(stream: StringStream) -> None:
        """Move to the start of the next line."""
        stream.read_until_line_end()
        if not stream.is_eof():
            stream.next()


def read_zone(text: str, **options: Any) -> list[Record]:
    """Parse a whole zone text; see `ZoneReader` for the options."""
    return list(ZoneReader(text, **options))


def read_zone_file(path: str, **options: Any) -> list[Record]:
    """Parse the zone file at `path`.

    Raises:
        OSError: If the file cannot be read.
    """
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    return read_zone(text, **options)
