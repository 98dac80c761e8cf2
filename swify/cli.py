"""Command line for exercising the crawler against live sites."""

from __future__ import annotations

import argparse
import asyncio
import json
import time
from dataclasses import asdict
from pathlib import Path

from loguru import logger

from swify.config.loader import load_config
from swify.config.schema import Config
from swify.crawler import browser_session, extract_page_text, scrape_images, scrape_web
from swify.research import ResearchClient


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="swify-crawl",
        description="Run swify scrapes from the command line.",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to config.json")
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Search several queries in parallel")
    search.add_argument("queries", nargs="+")

    image = sub.add_parser("image", help="Look up one photo URL")
    image.add_argument("query")
    image.add_argument("--fallback", default=None, help="Broader query tried if the first finds nothing")

    page = sub.add_parser("page", help="Extract long paragraphs from a page")
    page.add_argument("url")

    research = sub.add_parser("research", help="Gather and deduplicate research for queries")
    research.add_argument("queries", nargs="+")
    research.add_argument("--deep", action="store_true", help="Also read each source page")

    return parser


async def _run_search(config: Config, queries: list[str]) -> int:
    started_at = time.monotonic()
    responses = await asyncio.gather(*(scrape_web(q, config.crawler) for q in queries))
    elapsed_ms = int((time.monotonic() - started_at) * 1000)

    snippets: list[str] = []
    for query, response in zip(queries, responses):
        print(f"## {query}")
        for index, item in enumerate(response["organic"], start=1):
            print(f"{index}. {item.title}\n   {item.href}\n   {item.snippet}")
            snippets.append(item.snippet)

    print(f"Total deduplicated snippets: {len(set(snippets))} ({elapsed_ms}ms)")
    return 0


async def _run_image(config: Config, query: str, fallback: str | None) -> int:
    image_url = await scrape_images(query, fallback, config.crawler)
    if not image_url:
        print(f"No image found for: {query}")
        return 1
    print(image_url)
    return 0


async def _run_page(config: Config, url: str) -> int:
    async with browser_session(config.crawler) as browser:
        text = await extract_page_text(browser, url, config.crawler)
    if not text:
        print(f"No text extracted from: {url}")
        return 1
    print(text)
    return 0


async def _run_research(config: Config, queries: list[str], deep: bool) -> int:
    if deep:
        config.research.deep_read = True
    bundle = await ResearchClient(config).gather(queries)
    print(json.dumps(asdict(bundle), ensure_ascii=False, indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(args.config)

    if args.command == "search":
        coro = _run_search(config, args.queries)
    elif args.command == "image":
        coro = _run_image(config, args.query, args.fallback)
    elif args.command == "page":
        coro = _run_page(config, args.url)
    else:
        coro = _run_research(config, args.queries, args.deep)

    try:
        return asyncio.run(coro)
    except Exception as e:
        logger.error("{} failed: {}", args.command, e)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
