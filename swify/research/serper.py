"""Serper (google.serper.dev) as an alternative to browser scraping.

Both endpoints take ``{"q", "num"}`` and authenticate with ``X-API-KEY``;
``/search`` answers with ``organic`` hits and ``/images`` with ``images``.
"""

from typing import Any

import httpx

from swify.crawler.models import SearchResult


class SearchBackendError(Exception):
    """Raised when search provider selection or execution fails."""


async def _post(url: str, query: str, num: int, api_key: str) -> dict[str, Any]:
    async with httpx.AsyncClient() as client:
        response = await client.post(
            url,
            json={"q": query, "num": num},
            headers={"Content-Type": "application/json", "X-API-KEY": api_key},
            timeout=10.0,
        )
    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise SearchBackendError(
            f"serper returned HTTP {e.response.status_code} for {query!r} at {url}"
        ) from e
    return response.json()


async def search_serper(
    query: str,
    *,
    api_key: str,
    base_url: str,
    count: int = 4,
) -> list[SearchResult]:
    """Organic hits for ``query``, shaped like the browser scraper's results."""
    payload = await _post(base_url, query, count, api_key)
    return [
        SearchResult(
            title=item.get("title", ""),
            href=item.get("link", ""),
            snippet=item.get("snippet", ""),
        )
        for item in (payload.get("organic") or [])[:count]
    ]


async def search_serper_image(query: str, *, api_key: str, base_url: str) -> str:
    """First image URL for ``query``; empty string when Serper has none."""
    payload = await _post(base_url, query, 1, api_key)
    images = payload.get("images") or []
    if not images:
        return ""
    return images[0].get("imageUrl", "") or ""
