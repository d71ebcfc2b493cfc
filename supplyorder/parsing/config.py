"""TOML configuration loader for the item-list parser."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .matcher import MatchOptions
from .models import AliasRules

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]


@dataclass
class GeminiConfig:
    api_key: str = ""
    model: str = "gemini-2.5-flash"


@dataclass
class ClaudeConfig:
    api_key: str = ""
    model: str = "claude-sonnet-4-5-20250929"


@dataclass
class BackendConfig:
    name: str = "local"
    fallback_to_local: bool = True
    gemini: GeminiConfig = field(default_factory=GeminiConfig)
    claude: ClaudeConfig = field(default_factory=ClaudeConfig)


@dataclass
class MatcherConfig:
    score_threshold: int = 1
    substring_bonus: int = 2
    min_word_length: int = 2

    def to_options(self) -> MatchOptions:
        return MatchOptions(
            score_threshold=self.score_threshold,
            substring_bonus=self.substring_bonus,
            min_word_length=self.min_word_length,
        )


@dataclass
class CatalogConfig:
    path: str = ""


@dataclass
class ParserConfig:
    backend: BackendConfig = field(default_factory=BackendConfig)
    matcher: MatcherConfig = field(default_factory=MatcherConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    aliases: AliasRules = field(default_factory=AliasRules)


def load_config(path: str | Path | None = None) -> ParserConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    API keys can be overridden via environment variables.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    bck = raw.get("backend", {})
    mtc = raw.get("matcher", {})
    cat = raw.get("catalog", {})
    als = raw.get("aliases", {})

    gemini_cfg = bck.get("gemini", {})
    claude_cfg = bck.get("claude", {})

    # Resolve API keys: config file → environment variable
    gemini_api_key = gemini_cfg.get("api_key", "") or os.environ.get(
        "GEMINI_API_KEY", ""
    )
    claude_api_key = claude_cfg.get("api_key", "") or os.environ.get(
        "ANTHROPIC_API_KEY", ""
    )

    return ParserConfig(
        backend=BackendConfig(
            name=bck.get("name", "local"),
            fallback_to_local=bck.get("fallback_to_local", True),
            gemini=GeminiConfig(
                api_key=gemini_api_key,
                model=gemini_cfg.get("model", "gemini-2.5-flash"),
            ),
            claude=ClaudeConfig(
                api_key=claude_api_key,
                model=claude_cfg.get("model", "claude-sonnet-4-5-20250929"),
            ),
        ),
        matcher=MatcherConfig(
            score_threshold=mtc.get("score_threshold", 1),
            substring_bonus=mtc.get("substring_bonus", 2),
            min_word_length=mtc.get("min_word_length", 2),
        ),
        catalog=CatalogConfig(
            path=cat.get("path", ""),
        ),
        aliases=AliasRules.from_dict(als),
    )
