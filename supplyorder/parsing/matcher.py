"""Fuzzy matching of a cleaned item name against the catalog."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass

from .models import CatalogItem

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class MatchOptions:
    """Scoring knobs. A match is accepted when its score exceeds ``score_threshold``."""

    score_threshold: int = 1
    substring_bonus: int = 2
    min_word_length: int = 2


DEFAULT_MATCH_OPTIONS = MatchOptions()


@dataclass(frozen=True)
class _Scored:
    item: CatalogItem
    score: int


def _tight(text: str) -> str:
    return _WHITESPACE.sub("", text.lower())


def _score(
    name: str,
    candidate: str,
    words: list[str],
    allow_bonus: bool,
    options: MatchOptions,
) -> int:
    score = sum(1 for word in words if word in name)
    if allow_bonus and candidate in name:
        score += options.substring_bonus
    return score


def find_best_match(
    candidate: str,
    catalog: Sequence[CatalogItem],
    options: MatchOptions = DEFAULT_MATCH_OPTIONS,
) -> CatalogItem | None:
    """Return the catalog item that best matches ``candidate``, or None.

    An exact match ignoring case and whitespace ("bell pepper" vs
    "BellPepper") always wins. Otherwise each item scores one point per
    candidate word found in its name plus a bonus when the whole candidate
    is a substring of the name. Ties keep the earliest catalog entry.

    A one-word candidate found inside several names is ambiguous, so it
    only earns the substring bonus when exactly one name contains it.
    """
    if not candidate or not catalog:
        return None

    lowered = candidate.lower()
    tight = _tight(candidate)
    for item in catalog:
        if _tight(item.name) == tight:
            logger.debug("Exact match %r -> %s", candidate, item.id)
            return item

    words = list(dict.fromkeys(
        w for w in lowered.split() if len(w) >= options.min_word_length
    ))
    names = [item.name.lower() for item in catalog]

    allow_bonus = True
    if len(lowered.split()) == 1:
        containing = sum(1 for name in names if lowered in name)
        allow_bonus = containing == 1

    best: _Scored | None = None
    for item, name in zip(catalog, names):
        score = _score(name, lowered, words, allow_bonus, options)
        if best is None or score > best.score:
            best = _Scored(item, score)

    if best is not None and best.score > options.score_threshold:
        logger.debug("Matched %r -> %s (score %d)", candidate, best.item.id, best.score)
        return best.item

    logger.debug(
        "No confident match for %r (best score %d)",
        candidate,
        best.score if best else 0,
    )
    return None
