"""Tokenizer for a single resource record line.

A record line has the shape ``[NAME] [TTL] [IN] TYPE RDATA`` where the owner
name, the TTL and the class marker may each be left out. Left out fields are
taken from the parse context (previous owner name, zone TTL), and the known
record type keywords decide which of the leading words is the type when the
class marker is missing.
"""
from __future__ import annotations

import logging

from .errors import RecordSyntaxError
from .names import canonicalize_name
from .rdata import is_known_type, parse_rdata
from .records import FieldSet, ParseContext
from .stream import StringStream

logger = logging.getLogger(__name__)

CLASS_MARKER = "IN"


class RecordTokenizer:
    """Split one record line into NAME, TTL, TYPE and RDATA.

    The stream is borrowed for one call to `tokenize`. On success the cursor
    sits right after the record (on its line end); on error it sits where
    parsing failed.

    Args:
        stream: Cursor positioned on the first character of the record.
        context: Inherited values for left out fields.
    """

    def __init__(self, stream: StringStream, context: ParseContext) -> None:
        """Initialize the tokenizer.

        Args:
            stream: Cursor positioned on the first character of the record.
            context: Inherited values for left out fields.
        """
        self.stream = stream
        self.context = context

    def tokenize(self) -> FieldSet:
        """Parse the record.

        Returns:
            The resolved fields.

        Raises:
            RecordSyntaxError: If the fields cannot be identified or the
                record data is malformed.
        """
        if self._peek_class_marker():
            name, ttl = self._inherit_name_and_ttl()
            rtype = self._extract_class_and_type()
        else:
            name = self._extract_word()
            if not name:
                raise RecordSyntaxError(self.stream, "empty record")
            self.stream.ignore_horizontal_space()
            if self._peek_class_marker():
                name, ttl = self._resolve_missing_ttl(name)
                rtype = self._extract_class_and_type()
            else:
                ttl_mark = self.stream.mark()
                ttl = self._extract_word()
                self.stream.ignore_horizontal_space()
                name, ttl, rtype = self._resolve_type(name, ttl, ttl_mark)

        self.stream.ignore_horizontal_space()
        rdata = parse_rdata(self.stream, rtype, self.context.global_origin)

        if self.context.global_origin:
            name = canonicalize_name(
                name, self.context.global_origin, self.context.relative_to_origin
            )

        logger.debug("record %s %s %s at line %d", name, ttl, rtype, self.stream.line)
        return FieldSet(name=name, ttl=ttl, rtype=rtype, rdata=rdata)

    def _extract_word(self) -> str:
        """Consume the run of printable, non-space characters at the cursor."""
        start = self.stream.position
        while self.stream.is_printable() and not self.stream.is_whitespace():
            self.stream.next()
        return self.stream.text[start:self.stream.position]

    def _peek_class_marker(self) -> bool:
        """Check for ``IN`` followed by a horizontal space without consuming it."""
        stream = self.stream
        if not stream.is_char(CLASS_MARKER[0]):
            return False
        stream.next()
        if not stream.is_char(CLASS_MARKER[1]):
            stream.previous()
            return False
        stream.next()
        found = stream.is_horizontal_space()
        stream.previous()
        stream.previous()
        return found

    def _inherit_name_and_ttl(self) -> tuple[str, str]:
        """Record starts with the class marker: both NAME and TTL are inherited."""
        context = self.context
        if not context.previous_name:
            raise RecordSyntaxError(self.stream, "no previous owner name to inherit")
        if not context.global_ttl:
            raise RecordSyntaxError(self.stream, "no default TTL to inherit")
        return context.previous_name, context.global_ttl

    def _resolve_missing_ttl(self, word: str) -> tuple[str, str]:
        """One word precedes the class marker: it is either NAME or TTL."""
        context = self.context
        if context.global_ttl:
            return word, context.global_ttl
        if context.previous_name:
            return context.previous_name, word
        raise RecordSyntaxError(self.stream, "cannot tell owner name from TTL")

    def _extract_class_and_type(self) -> str:
        """Consume the class marker and the type keyword after it."""
        self.stream.next()
        self.stream.next()
        self.stream.ignore_horizontal_space()
        rtype = self._extract_word()
        if not rtype:
            raise RecordSyntaxError(self.stream, "missing record type")
        self.stream.ignore_horizontal_space()
        return rtype

    def _resolve_type(self, name: str, ttl: str, ttl_mark: int) -> tuple[str, str, str]:
        """Find the type among two leading words when no class marker follows.

        Args:
            name: Word read into the owner name slot.
            ttl: Word read into the TTL slot.
            ttl_mark: Position before the TTL slot word.

        Returns:
            The resolved (name, ttl, type).
        """
        if self._peek_class_marker():
            return name, ttl, self._extract_class_and_type()

        context = self.context
        if context.is_first:
            raise RecordSyntaxError(self.stream, "first record must not inherit fields")

        name_is_type = is_known_type(name)
        ttl_is_type = is_known_type(ttl)

        if name_is_type:
            # The TTL slot holds the first word of the record data.
            if not (context.previous_name and context.global_ttl):
                raise RecordSyntaxError(
                    self.stream, "record type without owner name needs inherited name and TTL"
                )
            logger.debug("type %s read as owner name, giving back %r", name, ttl)
            self.stream.reset(ttl_mark)
            return context.previous_name, context.global_ttl, name

        if ttl_is_type:
            if context.previous_name and not context.global_ttl:
                return context.previous_name, name, ttl
            if context.global_ttl:
                return name, context.global_ttl, ttl
            raise RecordSyntaxError(self.stream, "no default TTL or previous owner name")

        raise RecordSyntaxError(self.stream, "unknown record type")


def tokenize(stream: StringStream, context: ParseContext) -> FieldSet:
    """Parse one record line from `stream`; see `RecordTokenizer`."""
    return RecordTokenizer(stream, context).tokenize()
