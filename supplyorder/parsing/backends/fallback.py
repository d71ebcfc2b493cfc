"""Backend that falls back to local parsing when the AI backend fails."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from ..models import CatalogItem, ParsedItem
from . import ParserBackend, ParsingBackendError

logger = logging.getLogger(__name__)


class FallbackParserBackend(ParserBackend):
    """Try ``primary`` first and re-parse with ``fallback`` on failure."""

    def __init__(self, primary: ParserBackend, fallback: ParserBackend) -> None:
        self._primary = primary
        self._fallback = fallback
        self.name = f"{primary.name}+{fallback.name}"

    async def parse(
        self,
        text: str,
        catalog: Sequence[CatalogItem],
        aliases: Mapping[str, str] | None = None,
    ) -> list[ParsedItem]:
        try:
            return await self._primary.parse(text, catalog, aliases)
        except ParsingBackendError as e:
            logger.warning(
                "%s parser failed (%s), parsing locally instead",
                self._primary.name,
                e,
            )
            return await self._fallback.parse(text, catalog, aliases)
