"""Local, deterministic item-list parser."""

from __future__ import annotations

import dataclasses
import logging
import re
from collections.abc import Iterable, Mapping, Sequence

from .aliases import apply_aliases
from .matcher import DEFAULT_MATCH_OPTIONS, MatchOptions, find_best_match
from .models import CatalogItem, MatchedItem, NewItem, ParsedItem
from .quantity import extract_quantity_and_unit

logger = logging.getLogger(__name__)

_NON_NAME = re.compile(r"[^\w\s]|_")


def clean_name(text: str) -> str:
    """Replace punctuation with spaces and collapse whitespace."""
    return " ".join(_NON_NAME.sub(" ", text).split())


def parse_line(
    line: str,
    catalog: Sequence[CatalogItem],
    options: MatchOptions = DEFAULT_MATCH_OPTIONS,
) -> ParsedItem | None:
    """Parse one line into a matched or new item.

    Returns None when the line has no item name or a non-positive quantity.
    """
    extraction = extract_quantity_and_unit(line)
    name = clean_name(extraction.remaining)
    if not name:
        logger.debug("Dropping line without item name: %r", line)
        return None
    if extraction.quantity <= 0:
        logger.debug("Dropping line with zero quantity: %r", line)
        return None

    matched = find_best_match(name, catalog, options)
    if matched is not None:
        return MatchedItem(
            item_id=matched.id,
            quantity=extraction.quantity,
            unit=matched.unit,
        )
    return NewItem(name=name, quantity=extraction.quantity, unit=extraction.unit)


def aggregate(items: Iterable[ParsedItem]) -> list[ParsedItem]:
    """Merge repeated items by summing quantities, keeping first-seen order.

    Matched items merge on catalog id, new items on their lowercased name.
    """
    merged: dict[tuple[str, str], ParsedItem] = {}
    for item in items:
        key = (type(item).__name__, item.key)
        if key in merged:
            existing = merged[key]
            merged[key] = dataclasses.replace(
                existing, quantity=existing.quantity + item.quantity
            )
        else:
            merged[key] = item
    return list(merged.values())


def parse_item_list(
    text: str,
    catalog: Sequence[CatalogItem] | None = None,
    aliases: Mapping[str, str] | None = None,
    options: MatchOptions = DEFAULT_MATCH_OPTIONS,
) -> list[ParsedItem]:
    """Parse newline-separated text into aggregated items.

    Blank lines are skipped. Aliases are applied to each line before
    quantity extraction and catalog matching.
    """
    catalog = catalog or []
    parsed: list[ParsedItem] = []
    for raw in text.splitlines():
        if not raw.strip():
            continue
        item = parse_line(apply_aliases(raw, aliases), catalog, options)
        if item is not None:
            parsed.append(item)

    result = aggregate(parsed)
    logger.debug("Parsed %d lines into %d items", len(parsed), len(result))
    return result
