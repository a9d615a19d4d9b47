"""Owner name rewriting between absolute and origin-relative forms."""
from __future__ import annotations

import re

ROOT_MARKER = "@"


def canonicalize_name(name: str, origin: str, relative_to_origin: bool) -> str:
    """Rewrite an owner name against the zone origin.

    Args:
        name: Owner name as resolved from the record line.
        origin: Zone origin, e.g. ``example.com.`` or ``.``.
        relative_to_origin: Produce names relative to the origin (``www``,
            ``@``) instead of absolute ones (``www.example.com.``).

    Returns:
        The rewritten name. Names under a different domain are returned as is.
    """
    if name == ROOT_MARKER:
        return origin if relative_to_origin else name

    if name == origin:
        return ROOT_MARKER if relative_to_origin else name

    if name.endswith("."):
        if relative_to_origin:
            # Under the root origin the trailing dot is the whole suffix.
            suffix = origin if origin == "." else "." + origin
            match = re.match(rf"^(.+){re.escape(suffix)}$", name)
            if match:
                return match.group(1)
        return name

    if relative_to_origin:
        return name
    if origin == ".":
        return name + origin
    return f"{name}.{origin}"
