"""In-process deterministic parser backend."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from ..matcher import DEFAULT_MATCH_OPTIONS, MatchOptions
from ..models import CatalogItem, ParsedItem
from ..parser import parse_item_list
from . import ParserBackend


class LocalParserBackend(ParserBackend):
    """Parse with the regex grammar and catalog matcher, no network calls."""

    name = "local"

    def __init__(self, options: MatchOptions = DEFAULT_MATCH_OPTIONS) -> None:
        self._options = options

    async def parse(
        self,
        text: str,
        catalog: Sequence[CatalogItem],
        aliases: Mapping[str, str] | None = None,
    ) -> list[ParsedItem]:
        return parse_item_list(text, catalog, aliases, self._options)
