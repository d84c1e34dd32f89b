#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging

from ffetch import HTTPClient, ffetch


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Query a paginated JSON index")
    p.add_argument("base_url", help="Site origin, e.g. https://www.example.com")
    p.add_argument("path", nargs="?", default="/query-index.json")
    p.add_argument("--sheet", default=None)
    p.add_argument("--chunks", type=int, default=None)
    p.add_argument("--skip", type=int, default=0)
    p.add_argument("--limit", type=int, default=20)
    p.add_argument("--field", default="path", help="Field to print for each entry")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    async with HTTPClient(base_url=args.base_url) as client:
        query = ffetch(args.path, client.fetch).sheet(args.sheet)
        if args.chunks:
            query = query.chunks(args.chunks)
        entries = await query.skip(args.skip).limit(args.limit).all()

    print(f"{len(entries)} entries from {args.base_url}{args.path}:")
    print("-" * 80)
    for i, entry in enumerate(entries, start=args.skip):
        print(f"{i:>6} | {entry.get(args.field)}")


if __name__ == "__main__":
    asyncio.run(main())
