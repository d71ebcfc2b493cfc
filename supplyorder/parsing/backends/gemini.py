"""Gemini API parser backend."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from ..models import CatalogItem, ParsedItem
from . import ParserBackend, ParsingBackendError, build_prompt, parse_model_response

logger = logging.getLogger(__name__)


class GeminiParserBackend(ParserBackend):
    """Parse and match items with Google Gemini."""

    name = "gemini"

    def __init__(self, api_key: str = "", model: str = "gemini-2.5-flash") -> None:
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
                "Gemini API key is not set. "
                "Check the config file or the GEMINI_API_KEY environment variable."
            )

        try:
            import google.generativeai as genai
        except ImportError:
            raise ImportError(
                "google-generativeai SDK is required: pip install google-generativeai"
            ) from None

        genai.configure(api_key=self._api_key)
        model = genai.GenerativeModel(self._model)

        logger.info("Parsing %d characters with Gemini (%s)", len(text), self._model)
        try:
            response = await model.generate_content_async(
                build_prompt(text, catalog, aliases),
                generation_config={"response_mime_type": "application/json"},
            )
            answer = response.text
        except Exception as e:
            raise ParsingBackendError(
                "Failed to parse the item list. The AI model might be unavailable."
            ) from e

        return parse_model_response(answer, catalog)
