"""Configuration loading for zone reading options."""
from __future__ import annotations

import logging
from typing import Any

import yaml

from .records import parse_ttl

logger = logging.getLogger(__name__)


class Config:
    """Zone reader options loaded from a YAML file.

    Args:
        path: Filesystem path to the YAML configuration.

    Attributes:
        path: Path to the YAML config file.
        origin: Zone origin, or None when the zone sets its own.
        default_ttl: TTL applied until the zone declares ``$TTL``.
        relative_to_origin: Emit owner names relative to the origin.
        skip_errors: Skip malformed records instead of failing.
    """

    def __init__(self, path: str) -> None:
        """Initialize and load configuration.

        Args:
            path: Path to YAML file.
        """
        self.path = path
        self.origin: str | None = None
        self.default_ttl: str | None = None
        self.relative_to_origin = False
        self.skip_errors = False
        self.load()

    def load(self) -> None:
        """Load the YAML configuration.

        Raises:
            ValueError: On invalid YAML structure or option values.
            FileNotFoundError: If the config file is missing.
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML parsing error: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError(f"configuration must be a mapping, got {type(data).__name__}")

        origin = data.get("origin")
        if origin is not None:
            origin = str(origin).strip()
            if not origin.endswith("."):
                raise ValueError(f"origin must end with '.' (got {origin!r})")

        default_ttl = data.get("default_ttl")
        if default_ttl is not None:
            default_ttl = str(default_ttl).strip()
            try:
                parse_ttl(default_ttl)
            except ValueError as exc:
                raise ValueError(f"invalid default_ttl: {exc}") from exc

        flags = {}
        for key in ("relative_to_origin", "skip_errors"):
            value = data.get(key, False)
            if not isinstance(value, bool):
                raise ValueError(f"'{key}' must be a boolean")
            flags[key] = value

        self.origin = origin
        self.default_ttl = default_ttl
        self.relative_to_origin = flags["relative_to_origin"]
        self.skip_errors = flags["skip_errors"]
        logger.info("configuration loaded from %s", self.path)

    def reader_options(self) -> dict[str, Any]:
        """Keyword arguments for `ZoneReader`."""
        return {
            "origin": self.origin,
            "ttl": self.default_ttl,
            "relative_to_origin": self.relative_to_origin,
            "skip_errors": self.skip_errors,
        }
