from __future__ import annotations

import re

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def slugify(title: str) -> str:
    """
    "Hello, World! 2024" -> "hello-world-2024"

    Not unique on its own; the unique index on events.slug rejects collisions.
    """
    s = title.lower().strip()
    s = _DISALLOWED.sub("", s)
    s = _WHITESPACE.sub("-", s)
    s = _HYPHENS.sub("-", s)
    return s.strip("-")
