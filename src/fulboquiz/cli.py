"""Command-line interface for sampling player pools and serving the API."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import random
import sys
from collections import Counter
from pathlib import Path
from typing import Optional, Sequence

from fulboquiz.config import BINGO_CATEGORIES, first_match, load_settings
from fulboquiz.errors import EmptyPoolError, FetchError
from fulboquiz.ingest import DirectoryPlayerSource, HttpPlayerSource, PlayerSource
from fulboquiz.pool import sample_players


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Football trivia engine")
    sub = parser.add_subparsers(dest="command", required=True)

    sample = sub.add_parser("sample", help="Draw a category-balanced player sample")
    sample.add_argument("--data-dir", type=Path, default=None, help="Directory with <league>/<team>.json files")
    sample.add_argument("--api-base-url", default=None, help="Fetch team files from this API instead")
    sample.add_argument("--count", type=int, default=None, help="Number of players to draw")
    sample.add_argument("--seed", type=int, default=None, help="Seed for reproducible draws")
    sample.add_argument("--output", type=Path, default=None, help="Write the sample as JSON here")

    serve = sub.add_parser("serve", help="Run the REST API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    return parser.parse_args(argv)


def _source(args: argparse.Namespace) -> PlayerSource:
    settings = load_settings()
    data_dir = args.data_dir or settings.data_dir
    if data_dir is not None:
        return DirectoryPlayerSource(data_dir)
    base_url = args.api_base_url or settings.api_base_url
    if base_url:
        return HttpPlayerSource(base_url)
    raise SystemExit("Provide --data-dir or --api-base-url (or FULBOQUIZ_DATA_DIR / FULBOQUIZ_API_BASE_URL)")


def _run_sample(args: argparse.Namespace) -> int:
    count = args.count or load_settings().pool_size
    source = _source(args)
    try:
        raw = asyncio.run(source.get_players(count))
        players = sample_players(raw, count, rng=random.Random(args.seed))
    except (EmptyPoolError, FetchError) as exc:
        print(f"Could not build a sample: {exc}", file=sys.stderr)
        return 1

    coverage = Counter(
        (category.id if category else "unbucketed")
        for category in (first_match(player, BINGO_CATEGORIES) for player in players)
    )
    print(f"Sampled {len(players)} of {len(raw)} fetched players")
    for category in BINGO_CATEGORIES:
        print(f"  {category.id:<16} {coverage.get(category.id, 0)}")

    payload = [player.model_dump() for player in players]
    if args.output:
        args.output.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        print(f"Wrote sample to {args.output}")
    return 0


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from fulboquiz.api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = _parse_args(argv)
    if args.command == "sample":
        return _run_sample(args)
    return _run_serve(args)


if __name__ == "__main__":
    raise SystemExit(main())
