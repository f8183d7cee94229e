"""
Command line entry point.

Usage:
    python -m grocery_enrichment lookup "greek yogurt" "paper towels"
    python -m grocery_enrichment categorize "frozen pizza"
"""

import argparse
import asyncio
import json
import sys
from typing import Optional, Sequence

from grocery_enrichment.config import EngineSettings
from grocery_enrichment.domain.classification.classifier import categorize
from grocery_enrichment.factory import build_engine
from grocery_enrichment.logging_config import configure_logging


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="grocery_enrichment",
        description="Look up nutrition data for grocery item names",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    lookup = sub.add_parser("lookup", help="Resolve nutrition for item names")
    lookup.add_argument("names", nargs="+", help="Item names")
    lookup.add_argument("--limit", type=int, default=1, help="Primary result limit")

    classify = sub.add_parser("categorize", help="Shopping category from names only")
    classify.add_argument("names", nargs="+", help="Item names")

    return parser.parse_args(argv)


async def _lookup(settings: EngineSettings, names: Sequence[str], limit: int) -> list[dict]:
    async with build_engine(settings) as engine:
        results = []
        for name in names:
            record = await engine.lookup_service.quick_lookup(name, limit=limit)
            results.append({"name": name, **record.model_dump(mode="json")})
        return results


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    settings = EngineSettings.from_env()
    configure_logging(settings.log_level)

    if args.command == "categorize":
        output = [{"name": name, "category": categorize(name).value} for name in args.names]
    else:
        output = asyncio.run(_lookup(settings, args.names, args.limit))

    json.dump(output, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
