"""Alias substitution applied to raw lines before parsing."""

from __future__ import annotations

import re
from collections.abc import Mapping


def _compile(aliases: Mapping[str, str]) -> tuple[re.Pattern[str], dict[str, str]] | None:
    lookup = {
        source.strip().lower(): target
        for source, target in aliases.items()
        if source and source.strip()
    }
    if not lookup:
        return None
    # Longest phrase first so "coke zero" wins over "coke"
    phrases = sorted(lookup, key=len, reverse=True)
    alternation = "|".join(re.escape(p) for p in phrases)
    pattern = re.compile(rf"(?<!\w)(?:{alternation})(?!\w)", re.IGNORECASE)
    return pattern, lookup


def apply_aliases(line: str, aliases: Mapping[str, str] | None) -> str:
    """Replace every aliased phrase in ``line`` with its canonical text.

    Matching is case-insensitive on whole words. Substitution happens in a
    single pass, so a replacement is never itself re-aliased.
    """
    if not aliases or not line:
        return line
    compiled = _compile(aliases)
    if compiled is None:
        return line
    pattern, lookup = compiled
    return pattern.sub(lambda m: lookup[m.group(0).lower()], line)
