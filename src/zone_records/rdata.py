"""Record type registry and RDATA parsing backed by dnslib."""
from __future__ import annotations

import logging

from dnslib.dns import RD, RDMAP, DNSError
from dnslib.label import DNSLabelError
from dnslib.lex import WordLexer

from .errors import RDataSyntaxError
from .stream import StringStream

logger = logging.getLogger(__name__)

# OPT is an EDNS pseudo-record and never appears in zone files.
KNOWN_TYPES: frozenset[str] = frozenset(name for name in RDMAP if name != "OPT")


def is_known_type(name: str) -> bool:
    """Tell whether `name` is a record type keyword (case-sensitive)."""
    return name in KNOWN_TYPES


def read_rdata_text(stream: StringStream) -> str:
    """Consume the rest of a record and return its data text.

    Reading stops at the first newline outside parentheses, which is left under
    the cursor. Quoted strings are kept verbatim, ``;`` comments are dropped and
    grouping parentheses are replaced by spaces.

    Raises:
        RDataSyntaxError: On an unbalanced parenthesis or unterminated string.
    """
    out: list[str] = []
    depth = 0
    quoted = False
    while not stream.is_eof():
        char = stream.current()
        if quoted:
            out.append(char)
            if char == "\\":
                stream.next()
                if stream.is_eof():
                    break
                out.append(stream.current())
            elif char == '"':
                quoted = False
        elif char == '"':
            quoted = True
            out.append(char)
        elif char == ";":
            stream.read_until_line_end()
            continue
        elif char == "(":
            depth += 1
            out.append(" ")
        elif char == ")":
            if depth == 0:
                raise RDataSyntaxError(stream, "unbalanced ')'")
            depth -= 1
            out.append(" ")
        elif char == "\n":
            if depth == 0:
                break
            out.append(" ")
        else:
            out.append(char)
        stream.next()

    if quoted:
        raise RDataSyntaxError(stream, "unterminated quoted string")
    if depth:
        raise RDataSyntaxError(stream, "unbalanced '('")
    return "".join(out).strip()


def split_rdata(text: str) -> list[str]:
    """Split RDATA text into words the way dnslib's zone parser does.

    Raises:
        ValueError: If the text holds characters dnslib cannot lex.
    """
    lexer = WordLexer(text)
    lexer.commentchars = ";"
    return [value for token, value in lexer if token == "ATOM"]


def parse_rdata(stream: StringStream, rtype: str, origin: str | None = None) -> RD:
    """Parse the data of a record of type `rtype` starting at the cursor.

    Args:
        stream: Cursor positioned on the first RDATA character.
        rtype: Record type keyword.
        origin: Origin used to complete relative names inside the data.

    Returns:
        The dnslib RD instance for the record type.

    Raises:
        RDataSyntaxError: If the type is unknown or its data is malformed.
    """
    start = stream.mark()
    text = read_rdata_text(stream)
    end = stream.mark()

    if not is_known_type(rtype):
        raise _error_at(stream, start, end, f"unknown record type {rtype!r}")
    if not text:
        raise RDataSyntaxError(stream, f"missing data for {rtype} record")

    try:
        rdata = RDMAP[rtype].fromZone(split_rdata(text), origin)
    except (DNSError, DNSLabelError, ValueError, IndexError, TypeError) as exc:
        raise _error_at(stream, start, end, f"invalid {rtype} data {text!r} ({exc})") from exc
    except Exception as exc:  # last-resort guard
        raise _error_at(stream, start, end, f"invalid {rtype} data {text!r} ({exc!r})") from exc

    logger.debug("parsed %s data: %s", rtype, text)
    return rdata


def _error_at(stream: StringStream, start: int, end: int, reason: str) -> RDataSyntaxError:
    """Build an error positioned at `start`, leaving the cursor at `end`.

    Args:
        stream: Cursor over the record.
        start: Position of the first RDATA character.
        end: Position after the whole record.
        reason: Error description.

    Returns:
        The error to raise.
    """
    stream.reset(start)
    error = RDataSyntaxError(stream, reason)
    stream.reset(end)
    return error
