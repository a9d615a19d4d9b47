"""CLI for dumping the records of a zone file."""
from __future__ import annotations

import argparse
import logging
import sys

import yaml

from .config import Config
from .errors import ZoneError
from .records import Record
from .zone import read_zone_file

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Arguments to parse, defaults to ``sys.argv[1:]``.

    Returns:
        argparse.Namespace: Parsed CLI options:
            - zonefile (str): Path to the zone file.
            - config (str | None): Path to YAML config file.
            - origin (str | None): Zone origin.
            - ttl (str | None): Default TTL.
            - relative (bool | None): Emit owner names relative to the origin,
              None to keep the configured value.
            - skip_errors (bool | None): Skip malformed records, None to keep
              the configured value.
            - format (str): Output format.
            - log_level (str): Logging level.
    """
    parser = argparse.ArgumentParser(
        description="Parse a zone file and print its records",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("zonefile", help="Path to the zone file")
    parser.add_argument("--config", default=None, help="Path to YAML config")
    parser.add_argument("--origin", default=None, help="Zone origin, e.g. example.com.")
    parser.add_argument("--ttl", default=None, help="Default TTL")
    parser.add_argument(
        "--relative",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Print owner names relative to the origin",
    )
    parser.add_argument(
        "--skip-errors",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Skip malformed records instead of failing",
    )
    parser.add_argument("--format", default="zone", choices=["zone", "yaml"], help="Output format")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level",
    )
    return parser.parse_args(argv)


def reader_options(args: argparse.Namespace) -> dict:
    """Merge config file options with command line overrides.

    Args:
        args: Parsed command line options.

    Returns:
        Keyword arguments for `ZoneReader`.
    """
    options = Config(args.config).reader_options() if args.config else {}
    overrides = {
        "origin": args.origin,
        "ttl": args.ttl,
        "relative_to_origin": args.relative,
        "skip_errors": args.skip_errors,
    }
    options.update({key: value for key, value in overrides.items() if value is not None})
    return options


def dump_yaml(records: list[Record]) -> str:
    """Render records as a YAML list of mappings.

    Args:
        records: Records to render.

    Returns:
        YAML document text.
    """
    return yaml.safe_dump(
        [
            {"name": r.name, "ttl": r.ttl, "type": r.rtype, "rdata": r.rdata.toZone()}
            for r in records
        ],
        sort_keys=False,
    )


def main(argv: list[str] | None = None) -> int:
    """Run the CLI entry point.

    Returns:
        Process exit status.
    """
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        records = read_zone_file(args.zonefile, **reader_options(args))
    except (ZoneError, ValueError, OSError) as exc:
        logger.error("failed to read %s: %s", args.zonefile, exc)
        return 1

    if args.format == "yaml":
        sys.stdout.write(dump_yaml(records))
    else:
        for record in records:
            print(record.to_zone())
    return 0


if __name__ == "__main__":
    sys.exit(main())
