"""Organic result extraction from DuckDuckGo's HTML endpoint."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from loguru import logger

from swify.crawler.browser import DESKTOP_USER_AGENT, browser_session, new_page
from swify.crawler.filters import ASSET_RESOURCE_TYPES, install_request_filter
from swify.crawler.models import SearchResponse, SearchResult

if TYPE_CHECKING:
    from swify.config.schema import CrawlerConfig

_SEARCH_ENGINE_HOST = "duckduckgo.com"
_REDIRECT_MARKER = "/l/?uddg="

# Selectors live here only; a redesign of the results page should only touch this script.
_RESULTS_SCRIPT = """
() => Array.from(document.querySelectorAll(".result__body")).map((el) => {
  const titleEl = el.querySelector(".result__a");
  const snippetEl = el.querySelector(".result__snippet");
  return {
    title: titleEl ? titleEl.innerText : "",
    href: titleEl ? titleEl.href : "",
    snippet: snippetEl ? snippetEl.innerText : "",
  };
})
"""


def encode_query(query: str) -> str:
    """Percent-encode a query the way ``encodeURIComponent`` does."""
    return quote(query, safe="!~*'()")


def build_search_url(base_url: str, query: str) -> str:
    return f"{base_url}?q={encode_query(query)}"


def is_kept_link(href: str) -> bool:
    """Drop search-engine internal links unless they wrap an external destination."""
    if _REDIRECT_MARKER in href:
        return True
    return _SEARCH_ENGINE_HOST not in href


def select_results(raw: list[dict[str, Any]] | None, limit: int = 3) -> list[SearchResult]:
    """Turn raw in-page records into at most ``limit`` results, in page order."""
    results: list[SearchResult] = []
    for item in raw or []:
        result = SearchResult(
            title=item.get("title") or "",
            href=item.get("href") or "",
            snippet=item.get("snippet") or "",
        )
        if not is_kept_link(result.href):
            continue
        results.append(result)
        if len(results) >= limit:
            break
    return results


async def scrape_web(query: str, config: CrawlerConfig | None = None) -> SearchResponse:
    """
    Search the web for ``query`` and return up to three organic results.

    Any failure after the browser starts degrades to ``{"organic": []}``.
    A browser that cannot be launched raises.
    """
    from swify.config.schema import CrawlerConfig

    cfg = config or CrawlerConfig()
    started_at = time.monotonic()

    async with browser_session(cfg) as browser:
        try:
            page = await new_page(browser, DESKTOP_USER_AGENT)
            await install_request_filter(page, ASSET_RESOURCE_TYPES)

            logger.info("Searching: {}", query)
            await page.goto(
                build_search_url(cfg.search_url, query),
                wait_until="domcontentloaded",
                timeout=cfg.search_timeout_ms,
            )
            raw = await page.evaluate(_RESULTS_SCRIPT)
            results = select_results(raw, limit=cfg.max_search_results)
            await page.close()
        except Exception as e:
            logger.warning("Search scrape failed for {!r}: {}", query, e)
            return {"organic": []}

    logger.debug(
        "Found {} results for {!r} in {}ms",
        len(results),
        query,
        int((time.monotonic() - started_at) * 1000),
    )
    return {"organic": results}
