"""Free-text item-list parsing for supplier orders."""

from .aliases import apply_aliases
from .backends import ParserBackend, ParsingBackendError, create_backend
from .config import ParserConfig, load_config
from .matcher import MatchOptions, find_best_match
from .models import (
    AliasRules,
    CatalogItem,
    MatchedItem,
    NewItem,
    ParsedItem,
    load_catalog,
)
from .parser import aggregate, parse_item_list, parse_line
from .quantity import Extraction, extract_quantity_and_unit
from .units import Unit, normalize_unit

__all__ = [
    "Unit",
    "normalize_unit",
    "CatalogItem",
    "MatchedItem",
    "NewItem",
    "ParsedItem",
    "AliasRules",
    "load_catalog",
    "apply_aliases",
    "Extraction",
    "extract_quantity_and_unit",
    "MatchOptions",
    "find_best_match",
    "parse_line",
    "parse_item_list",
    "aggregate",
    "ParserBackend",
    "ParsingBackendError",
    "create_backend",
    "ParserConfig",
    "load_config",
]
