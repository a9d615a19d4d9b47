"""Data structures representing zone records and their parse context."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from dnslib.dns import RD

# Unit suffixes accepted in TTL values, in seconds.
TTL_UNITS: dict[str, int] = {"s": 1, "m": 60, "h": 3600, "d": 86400, "w": 604800}


def parse_ttl(value: str) -> int:
    """Convert a TTL string such as ``3600`` or ``90m`` to seconds.

    Args:
        value: TTL as written in a zone file.

    Returns:
        Number of seconds.

    Raises:
        ValueError: If the value is not a non-negative integer with an
            optional s/m/h/d/w suffix.
    """
    text = value.strip()
    multiplier = TTL_UNITS.get(text[-1:].lower())
    if multiplier is not None:
        text = text[:-1]
    if not text.isdigit():
        raise ValueError(f"invalid TTL {value!r}")
    return int(text) * (multiplier or 1)


@dataclass(frozen=True, slots=True)
class ParseContext:
    """Values a record may inherit when fields are left out.

    Empty strings count as absent.

    Attributes:
        global_origin (str | None): Zone origin, e.g. ``example.com.``.
        global_ttl (str | None): Zone-wide default TTL.
        is_first (bool): True for the first record of a zone.
        previous_name (str | None): Resolved owner name of the previous record.
        relative_to_origin (bool): Rewrite owner names relative to the origin
            instead of absolute.
    """

    global_origin: str | None = None
    global_ttl: str | None = None
    is_first: bool = False
    previous_name: str | None = None
    relative_to_origin: bool = False


@dataclass(slots=True)
class FieldSet:
    """Fields of one resource record line.

    Attributes:
        name (str): Owner name.
        ttl (str): TTL as written or inherited.
        rtype (str): Record type keyword.
        rdata (RD): Type specific data parsed by dnslib.
    """

    name: str
    ttl: str
    rtype: str
    rdata: RD

    def as_dict(self) -> dict[str, Any]:
        """Return the fields keyed by NAME, TTL, TYPE and RDATA.

        Returns:
            Mapping of field names to values.
        """
        return {"NAME": self.name, "TTL": self.ttl, "TYPE": self.rtype, "RDATA": self.rdata}


@dataclass(slots=True)
class Record:
    """Single DNS record entry read from a zone.

    Attributes:
        name (str): Owner name, absolute or relative to the zone origin.
        rtype (str): DNS record type (A, AAAA, CNAME, MX, TXT, ...).
        rdata (RD): Record data.
        ttl (int): Time to live, in seconds.
        line (int): Source line the record starts on.
    """

    name: str
    rtype: str
    rdata: RD
    ttl: int
    line: int = 0

    @classmethod
    def from_fields(cls, fields: FieldSet, line: int = 0) -> Record:
        """Build a record from tokenized fields.

        Raises:
            ValueError: If the TTL is not valid.
        """
        return cls(
            name=fields.name,
            rtype=fields.rtype,
            rdata=fields.rdata,
            ttl=parse_ttl(fields.ttl),
            line=line,
        )

    def to_zone(self) -> str:
        """Render the record as a zone file line.

        Returns:
            ``NAME TTL IN TYPE RDATA``.
        """
        return f"{self.name} {self.ttl} IN {self.rtype} {self.rdata.toZone()}"
