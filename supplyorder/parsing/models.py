"""Data models for catalog items, parse results, and alias rules."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from .units import Unit, normalize_unit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogItem:
    """A known orderable item."""

    id: str
    name: str
    unit: Unit
    supplier_id: str = ""


@dataclass(frozen=True)
class MatchedItem:
    """A parsed line that refers to an existing catalog item.

    The unit always comes from the catalog, never from the typed text.
    """

    item_id: str
    quantity: float
    unit: Unit

    @property
    def key(self) -> str:
        return self.item_id

    def to_dict(self) -> dict:
        return {
            "matchedItemId": self.item_id,
            "quantity": self.quantity,
            "unit": self.unit.value,
        }


@dataclass(frozen=True)
class NewItem:
    """A parsed line with no catalog match."""

    name: str
    quantity: float
    unit: Unit | None = None

    @property
    def key(self) -> str:
        return self.name.lower()

    def to_dict(self) -> dict:
        data: dict = {"newItemName": self.name, "quantity": self.quantity}
        if self.unit is not None:
            data["unit"] = self.unit.value
        return data


ParsedItem = Union[MatchedItem, NewItem]


@dataclass
class AliasRules:
    """User-defined phrase substitutions, global and per store."""

    global_aliases: dict[str, str] = field(default_factory=dict)
    store_aliases: dict[str, dict[str, str]] = field(default_factory=dict)

    def for_store(self, store: str | None = None) -> dict[str, str]:
        """Effective mapping for a store. Store entries win over global ones."""
        merged = dict(self.global_aliases)
        if store:
            merged.update(self.store_aliases.get(store, {}))
        return merged

    @classmethod
    def from_dict(cls, raw: dict | None) -> AliasRules:
        """Build from the stored settings shape ``{"global": {...}, "<store>": {...}}``."""
        if not raw:
            return cls()
        for name, rules in raw.items():
            if rules and not isinstance(rules, dict):
                raise ValueError(f"Alias rules for {name!r} must be a table of phrases")
        global_aliases = dict(raw.get("global") or {})
        stores = {
            name: dict(rules)
            for name, rules in raw.items()
            if name != "global" and rules
        }
        return cls(global_aliases=global_aliases, store_aliases=stores)


def catalog_item_from_dict(data: dict) -> CatalogItem:
    try:
        item_id = str(data["id"])
        name = data["name"]
        raw_unit = data["unit"]
    except KeyError as e:
        raise ValueError(f"Catalog entry is missing field {e.args[0]!r}: {data!r}") from None

    unit = normalize_unit(raw_unit)
    if unit is None:
        raise ValueError(f"Unknown unit {raw_unit!r} for catalog item {name!r}")

    return CatalogItem(
        id=item_id,
        name=name,
        unit=unit,
        supplier_id=str(data.get("supplierId", data.get("supplier_id", ""))),
    )


def load_catalog(path: str | Path) -> list[CatalogItem]:
    """Load catalog items from a JSON array file."""
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ValueError(f"Catalog file must contain a JSON array: {path}")

    items = [catalog_item_from_dict(entry) for entry in raw]
    logger.info("Loaded %d catalog items from %s", len(items), path)
    return items
