"""Parser backend base class, shared AI helpers, and factory."""

from __future__ import annotations

import json
import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from ..models import CatalogItem, MatchedItem, NewItem, ParsedItem
from ..parser import aggregate
from ..units import Unit, normalize_unit

if TYPE_CHECKING:
    from ..config import ParserConfig

logger = logging.getLogger(__name__)


class ParsingBackendError(RuntimeError):
    """Raised when a backend cannot produce a result (never an empty list)."""


class ParserBackend(ABC):
    """Abstract base for turning pasted text into parsed items."""

    name: str = ""

    @abstractmethod
    async def parse(
        self,
        text: str,
        catalog: Sequence[CatalogItem],
        aliases: Mapping[str, str] | None = None,
    ) -> list[ParsedItem]:
        """Parse ``text`` against ``catalog``.

        Matched items carry the catalog unit and repeated items are merged.
        """
        ...


_PROMPT = """\
Parse the following user-provided list of items. For each item, match it against the provided list of existing items.

Rules:
1. If a direct or very close match is found in the existing items, use "matchedItemId" with its ID. Do not guess if the match is not confident.
2. If no confident match is found, treat it as a new item and use "newItemName". Provide a concise, clean name for it.
3. Extract the quantity for every item. This can be a decimal. If no quantity is given, use 1.
4. For new items, extract the unit if specified and normalize it to one of: {units}. Common terms: bottle=bt; pax, pack=pk; liter(s)=L; pcs=pc. Leave it out if not specified. Omit the unit for matched items.
5. Apply these alias replacements to the user's text before matching (JSON object, phrase -> replacement): {aliases}
6. Return only a JSON array of objects like {{"matchedItemId": "...", "quantity": 1}} or {{"newItemName": "...", "quantity": 1, "unit": "kg"}}. No other text.

Existing items for matching (JSON):
{catalog}

User's list to parse:
---
{text}
---
"""


def build_prompt(
    text: str,
    catalog: Sequence[CatalogItem],
    aliases: Mapping[str, str] | None = None,
) -> str:
    return _PROMPT.format(
        units=", ".join(u.value for u in Unit),
        aliases=json.dumps(dict(aliases or {}), ensure_ascii=False),
        catalog=json.dumps(
            [{"id": item.id, "name": item.name} for item in catalog],
            ensure_ascii=False,
        ),
        text=text,
    )


def _strip_fences(text: str) -> str:
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        lines = [l for l in lines[1:] if not l.strip().startswith("```")]
        cleaned = "\n".join(lines)
    return cleaned


def parse_model_response(
    text: str, catalog: Sequence[CatalogItem]
) -> list[ParsedItem]:
    """Validate a model's JSON answer and convert it to parsed items."""
    try:
        entries = json.loads(_strip_fences(text))
    except json.JSONDecodeError as e:
        raise ParsingBackendError(
            "The AI model returned an invalid format."
        ) from e
    if not isinstance(entries, list):
        raise ParsingBackendError("The AI model response was not a JSON array.")

    by_id = {item.id: item for item in catalog}
    items: list[ParsedItem] = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise ParsingBackendError(f"Unexpected entry in AI response: {entry!r}")

        quantity = _entry_quantity(entry)
        if quantity <= 0:
            logger.debug("Skipping AI entry with non-positive quantity: %r", entry)
            continue

        item_id = entry.get("matchedItemId")
        new_name = entry.get("newItemName")
        unit = entry.get("unit")
        if item_id is not None and (
            isinstance(item_id, bool) or not isinstance(item_id, (str, int))
        ):
            raise ParsingBackendError(f"Invalid matchedItemId in AI response: {entry!r}")
        if new_name is not None and not isinstance(new_name, str):
            raise ParsingBackendError(f"Invalid newItemName in AI response: {entry!r}")
        if unit is not None and not isinstance(unit, str):
            raise ParsingBackendError(f"Invalid unit in AI response: {entry!r}")

        new_name = (new_name or "").strip()
        if item_id not in (None, ""):
            catalog_item = by_id.get(str(item_id))
            if catalog_item is None:
                raise ParsingBackendError(
                    f"AI response references unknown item id {item_id!r}"
                )
            items.append(
                MatchedItem(catalog_item.id, quantity, catalog_item.unit)
            )
        elif new_name:
            items.append(NewItem(new_name, quantity, normalize_unit(unit)))
        else:
            raise ParsingBackendError(
                f"AI entry has neither matchedItemId nor newItemName: {entry!r}"
            )

    return aggregate(items)


def _entry_quantity(entry: dict) -> float:
    raw = entry.get("quantity", 1)
    if isinstance(raw, bool):
        raise ParsingBackendError(f"Invalid quantity in AI response: {entry!r}")
    try:
        quantity = float(raw)
    except (TypeError, ValueError):
        raise ParsingBackendError(
            f"Invalid quantity in AI response: {entry!r}"
        ) from None
    if not math.isfinite(quantity):
        raise ParsingBackendError(f"Invalid quantity in AI response: {entry!r}")
    return quantity


def create_backend(config: ParserConfig) -> ParserBackend:
    """Create a parser backend based on configuration."""
    from .local import LocalParserBackend

    backend_name = config.backend.name
    local = LocalParserBackend(options=config.matcher.to_options())

    match backend_name:
        case "local":
            return local
        case "gemini":
            from .gemini import GeminiParserBackend

            backend: ParserBackend = GeminiParserBackend(
                api_key=config.backend.gemini.api_key,
                model=config.backend.gemini.model,
            )
        case "claude":
            from .claude import ClaudeParserBackend

            backend = ClaudeParserBackend(
                api_key=config.backend.claude.api_key,
                model=config.backend.claude.model,
            )
        case _:
            raise ValueError(
                f"Unknown parser backend: {backend_name!r} "
                f"(choose local / gemini / claude)"
            )

    if config.backend.fallback_to_local:
        from .fallback import FallbackParserBackend

        return FallbackParserBackend(primary=backend, fallback=local)
    return backend
