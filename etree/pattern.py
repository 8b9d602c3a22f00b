"""Wildcard name matching for exclude patterns.

Patterns understand two wildcards only: ``*`` (any run of characters, possibly
empty) and ``?`` (exactly one character). Everything else is literal and
compared case-insensitively against the whole name.
"""

from __future__ import annotations

import re
from functools import lru_cache


@lru_cache(maxsize=64)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Translate a wildcard pattern into an anchored case-insensitive regex."""
    parts: list[str] = []
    for ch in pattern:
        if ch == "*":
            parts.append(".*")
        elif ch == "?":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


def matches(name: str, pattern: str) -> bool:
    """Return whether ``name`` matches ``pattern`` in full.

    An empty pattern disables matching and never matches anything.
    """
    if not pattern:
        return False
    return compile_pattern(pattern).fullmatch(name) is not None


__all__ = ["compile_pattern", "matches"]
