"""Quantity and unit extraction from a single order line.

Each rule is tried in order. The first quantity rule that matches removes its
span from the line and ends the quantity search; the unit-only rule always
runs last when no unit has been captured yet.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from .units import Unit, normalize_unit, unit_spellings

logger = logging.getLogger(__name__)

_NUMBER = r"\d*[,.]?\d+"
_UNITS = "(?:" + "|".join(re.escape(s) for s in unit_spellings()) + ")"

_SPACED_DECIMAL = re.compile(rf"\b(0)[\s,.]+(\d+)\s*({_UNITS})\b", re.IGNORECASE)
_NUMBER_AND_UNIT = re.compile(rf"({_NUMBER})\s*({_UNITS})\b", re.IGNORECASE)
_X_NOTATION = re.compile(
    rf"(?<![a-z])x\s*({_NUMBER})\b|\b({_NUMBER})\s*x(?![a-z])", re.IGNORECASE
)
_TRAILING_NUMBER = re.compile(rf"\s({_NUMBER})[^\w\s]*\s*$")
_LEADING_NUMBER = re.compile(rf"^\s*({_NUMBER})\s")
_UNIT_ONLY = re.compile(rf"\b({_UNITS})\b", re.IGNORECASE)


@dataclass(frozen=True)
class Extraction:
    quantity: float
    unit: Unit | None
    remaining: str


@dataclass(frozen=True)
class _Hit:
    quantity: float
    unit: Unit | None
    span: tuple[int, int]


def _to_float(text: str) -> float:
    return float(text.replace(",", ".", 1))


def _spaced_decimal(line: str) -> _Hit | None:
    """``0 5 kg`` → 0.5 kg (decimal point lost as whitespace)."""
    m = _SPACED_DECIMAL.search(line)
    if not m:
        return None
    return _Hit(float(f"{m.group(1)}.{m.group(2)}"), normalize_unit(m.group(3)), m.span())


def _number_with_unit(line: str) -> _Hit | None:
    m = _NUMBER_AND_UNIT.search(line)
    if not m:
        return None
    return _Hit(_to_float(m.group(1)), normalize_unit(m.group(2)), m.span())


def _x_notation(line: str) -> _Hit | None:
    m = _X_NOTATION.search(line)
    if not m:
        return None
    return _Hit(_to_float(m.group(1) or m.group(2)), None, m.span())


def _trailing_number(line: str) -> _Hit | None:
    m = _TRAILING_NUMBER.search(line)
    if not m:
        return None
    return _Hit(_to_float(m.group(1)), None, m.span())


def _leading_number(line: str) -> _Hit | None:
    m = _LEADING_NUMBER.search(line)
    if not m:
        return None
    return _Hit(_to_float(m.group(1)), None, m.span())


QUANTITY_RULES: list[tuple[str, Callable[[str], _Hit | None]]] = [
    ("spaced_decimal", _spaced_decimal),
    ("number_with_unit", _number_with_unit),
    ("x_notation", _x_notation),
    ("trailing_number", _trailing_number),
    ("leading_number", _leading_number),
]


def _cut(line: str, span: tuple[int, int]) -> str:
    start, end = span
    return f"{line[:start]} {line[end:]}"


def extract_quantity_and_unit(line: str) -> Extraction:
    """Extract quantity, unit, and the leftover name text from one line.

    Quantity defaults to 1 and unit to None when nothing is found.
    """
    quantity = 1.0
    unit: Unit | None = None
    # Pad so edge-anchored rules see a separator on both sides
    remaining = f" {line} "

    for name, rule in QUANTITY_RULES:
        hit = rule(remaining)
        if hit is None:
            continue
        logger.debug("Rule %s matched %r", name, line)
        quantity = hit.quantity
        unit = hit.unit
        remaining = _cut(remaining, hit.span)
        break

    if unit is None:
        m = _UNIT_ONLY.search(remaining)
        if m:
            unit = normalize_unit(m.group(1))
            remaining = _cut(remaining, m.span())

    return Extraction(
        quantity=quantity,
        unit=unit,
        remaining=" ".join(remaining.split()),
    )
