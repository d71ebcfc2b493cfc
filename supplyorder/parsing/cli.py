"""CLI entry point for the item-list parser."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from dotenv import load_dotenv

from .backends import ParsingBackendError, create_backend
from .config import load_config
from .models import CatalogItem, MatchedItem, load_catalog
from .units import spellings_by_unit


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="supplyorder-parse",
        description="Turn pasted item lists into structured order items",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to the config file (TOML)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # units
    sub.add_parser("units", help="List canonical units and accepted spellings")

    # parse
    parse_parser = sub.add_parser("parse", help="Parse an item list")
    parse_parser.add_argument(
        "file", nargs="?", default=None, help="Text file to parse (default: stdin)"
    )
    parse_parser.add_argument(
        "--catalog", type=str, default=None, metavar="FILE",
        help="Catalog JSON file",
    )
    parse_parser.add_argument(
        "--store", type=str, default=None, help="Store whose alias rules apply",
    )
    parse_parser.add_argument(
        "--backend", type=str, default=None,
        help="Parser backend (local / gemini / claude)",
    )
    parse_parser.add_argument("--json", action="store_true", help="Output as JSON")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    load_dotenv()
    config = load_config(args.config)

    match args.command:
        case "units":
            _cmd_units()
        case "parse":
            asyncio.run(_cmd_parse(config, args))


def _cmd_units() -> None:
    for unit, spellings in spellings_by_unit().items():
        print(f"  {unit.value:<6} {', '.join(spellings)}")


def _read_text(path: str | None) -> str:
    if path is None:
        return sys.stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


async def _cmd_parse(config, args) -> None:
    if args.backend:
        config.backend.name = args.backend

    catalog_path = args.catalog or config.catalog.path
    aliases = config.aliases.for_store(args.store)

    try:
        catalog: list[CatalogItem] = load_catalog(catalog_path) if catalog_path else []
        text = _read_text(args.file)
        backend = create_backend(config)
        items = await backend.parse(text, catalog, aliases)
    except (ParsingBackendError, ValueError, OSError) as e:
        print(f"Parse error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps([i.to_dict() for i in items], ensure_ascii=False, indent=2))
        return

    if not items:
        print("No items found.")
        return

    names = {item.id: item.name for item in catalog}
    print(f"Parsed {len(items)} item(s):")
    for item in items:
        unit = item.unit.value if item.unit else "-"
        if isinstance(item, MatchedItem):
            print(f"  {item.quantity:>8g} {unit:<6} {names[item.item_id]}")
        else:
            print(f"  {item.quantity:>8g} {unit:<6} {item.name}  (new)")
