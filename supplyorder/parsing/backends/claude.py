"""Claude API parser backend."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from ..models import CatalogItem, ParsedItem
from . import ParserBackend, ParsingBackendError, build_prompt, parse_model_response

logger = logging.getLogger(__name__)


class ClaudeParserBackend(ParserBackend):
    """Parse and match items with Anthropic's Claude."""

    name = "claude"

    def __init__(self, api_key: str = "", model: str = "claude-sonnet-4-5-20250929") -> None:
        self._api_key = api_key
        self._model = model

    async def parse(
        self,
        text: str,
        catalog: Sequence[CatalogItem],
        aliases: Mapping[str, str] | None = None,
    ) -> list[ParsedItem]:
        if not self._api_key:
            raise ParsingBackendError(
                "Anthropic API key is not set. "
                "Check the config file or the ANTHROPIC_API_KEY environment variable."
            )

        try:
            import anthropic
        except ImportError:
            raise ImportError(
                "anthropic SDK is required: pip install anthropic"
            ) from None

        client = anthropic.AsyncAnthropic(api_key=self._api_key)
        logger.info("Parsing %d characters with Claude (%s)", len(text), self._model)
        try:
            response = await client.messages.create(
                model=self._model,
                max_tokens=4096,
                messages=[
                    {"role": "user", "content": build_prompt(text, catalog, aliases)}
                ],
            )
            answer = response.content[0].text
        except Exception as e:
            raise ParsingBackendError(
                "Failed to parse the item list. The AI model might be unavailable."
            ) from e

        return parse_model_response(answer, catalog)
