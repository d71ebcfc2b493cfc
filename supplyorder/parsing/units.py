"""Canonical order units and their accepted spellings."""

from __future__ import annotations

from enum import Enum


class Unit(str, Enum):
    KG = "kg"
    PC = "pc"
    L = "L"
    BOX = "box"
    PK = "pk"
    BT = "bt"
    CAN = "can"
    ROLL = "roll"
    BLOCK = "block"
    GLASS = "glass"
    CASE = "case"
    CTN = "ctn"
    JAR = "jar"

    def __str__(self) -> str:
        return self.value


# Lowercased spelling → canonical unit. Canonical symbols are added below.
_SYNONYMS: dict[str, Unit] = {
    "pcs": Unit.PC,
    "piece": Unit.PC,
    "pieces": Unit.PC,
    "kgs": Unit.KG,
    "kilo": Unit.KG,
    "kilos": Unit.KG,
    "kilogram": Unit.KG,
    "kilograms": Unit.KG,
    "liter": Unit.L,
    "liters": Unit.L,
    "litre": Unit.L,
    "litres": Unit.L,
    "litter": Unit.L,
    "rolls": Unit.ROLL,
    "blocks": Unit.BLOCK,
    "boxes": Unit.BOX,
    "bx": Unit.BOX,
    "pack": Unit.PK,
    "packs": Unit.PK,
    "pax": Unit.PK,
    "bottle": Unit.BT,
    "bottles": Unit.BT,
    "btl": Unit.BT,
    "btls": Unit.BT,
    "cans": Unit.CAN,
    "glasses": Unit.GLASS,
    "cases": Unit.CASE,
    "carton": Unit.CTN,
    "cartons": Unit.CTN,
    "jars": Unit.JAR,
}
for _unit in Unit:
    _SYNONYMS.setdefault(_unit.value.lower(), _unit)


def normalize_unit(raw: str | None) -> Unit | None:
    """Map a user-typed unit spelling to its canonical unit.

    Returns None for empty or unknown tokens.
    """
    if not isinstance(raw, str) or not raw:
        return None
    return _SYNONYMS.get(raw.strip().lower())


def display_form(unit: Unit) -> str:
    return unit.value


def unit_spellings() -> list[str]:
    """All accepted spellings, longest first (for regex alternation)."""
    return sorted(_SYNONYMS, key=lambda s: (-len(s), s))


def spellings_by_unit() -> dict[Unit, list[str]]:
    grouped: dict[Unit, list[str]] = {unit: [] for unit in Unit}
    for spelling, unit in _SYNONYMS.items():
        grouped[unit].append(spelling)
    return {unit: sorted(names) for unit, names in grouped.items()}
