#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
from html.parser import HTMLParser

from ffetch import HTTPClient, ffetch


class TitleParser(HTMLParser):
    """Collect the text of the first <title> element."""

    def __init__(self) -> None:
        super().__init__()
        self._in_title = False
        self.title: str | None = None

    def handle_starttag(self, tag, attrs):
        if tag == "title" and self.title is None:
            self._in_title = True

    def handle_endtag(self, tag):
        if tag == "title":
            self._in_title = False

    def handle_data(self, data):
        if self._in_title:
            self.title = (self.title or "") + data


def parse_title(html: str) -> str | None:
    parser = TitleParser()
    parser.feed(html)
    return parser.title


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Follow index entries to their documents")
    p.add_argument("base_url")
    p.add_argument("path", nargs="?", default="/query-index.json")
    p.add_argument("--limit", type=int, default=5)
    p.add_argument("--max-in-flight", type=int, default=5)
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    async with HTTPClient(base_url=args.base_url) as client:
        entries = await (
            ffetch(args.path, client.fetch, parse_title)
            .map(lambda entry: {"path": entry.get("path"), "document": entry.get("path")})
            .follow("document", max_in_flight=args.max_in_flight)
            .limit(args.limit)
            .all()
        )

    for entry in entries:
        print(f"{entry['path']:50} | {entry['document'] or '<not found>'}")


if __name__ == "__main__":
    asyncio.run(main())
