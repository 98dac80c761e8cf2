"""Fan-out research over several queries, with source and snippet dedupe."""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from loguru import logger

from swify.crawler import browser_session, extract_page_text, scrape_images, scrape_web
from swify.crawler.models import SearchResult
from swify.research.serper import SearchBackendError, search_serper, search_serper_image
from swify.research.sources import clean_title, normalize_source_href

if TYPE_CHECKING:
    from swify.config.schema import Config


@dataclass(slots=True)
class SourceLink:
    title: str
    href: str


@dataclass
class ResearchBundle:
    """Deduplicated material gathered for one topic."""

    sources: list[SourceLink] = field(default_factory=list)
    snippets: list[str] = field(default_factory=list)
    context: str = ""
    pages: list[str] = field(default_factory=list)


def dedupe_sources(results: list[SearchResult]) -> list[SourceLink]:
    """Unique sources by unwrapped href; the first title seen wins."""
    unique: dict[str, SourceLink] = {}
    for item in results:
        href = normalize_source_href(item.href)
        if not href or href in unique:
            continue
        unique[href] = SourceLink(title=item.title, href=href)
    return list(unique.values())


def dedupe_snippets(results: list[SearchResult]) -> list[str]:
    return list(dict.fromkeys(item.snippet for item in results))


class ResearchClient:
    """Provider dispatcher and aggregator for topic research."""

    _ENV_KEY = "SERPER_API_KEY"

    def __init__(self, config: Config | None = None):
        from swify.config.schema import Config

        self.config = config or Config()

    @property
    def _research(self):
        return self.config.research

    async def search(self, query: str) -> list[SearchResult]:
        """Search using the configured provider."""
        provider = (self._research.provider or "browser").lower()
        if provider == "browser":
            response = await scrape_web(query, self.config.crawler)
            return response["organic"]

        if provider == "serper":
            serper_cfg = self._research.serper
            api_key = self._serper_api_key()
            try:
                return await search_serper(
                    query,
                    api_key=api_key,
                    base_url=serper_cfg.base_url,
                    count=serper_cfg.count,
                )
            except SearchBackendError:
                raise
            except Exception as e:
                raise SearchBackendError(f"serper search failed: {e}") from e

        raise SearchBackendError(f"unknown search provider: {provider}")

    async def gather(self, queries: list[str]) -> ResearchBundle:
        """
        Run every query concurrently and merge what comes back.

        Queries are capped to ``research.max_queries`` so the number of
        concurrent browser processes stays small.
        """
        selected = [q.strip() for q in queries if q and q.strip()]
        selected = selected[: self._research.max_queries]
        if not selected:
            return ResearchBundle()

        logger.info("Gathering research for {} queries: {}", len(selected), selected)
        responses = await asyncio.gather(*(self.search(q) for q in selected))
        results = [item for organic in responses for item in organic]

        bundle = ResearchBundle(
            sources=dedupe_sources(results),
            snippets=dedupe_snippets(results),
        )

        if self._research.deep_read and bundle.sources:
            bundle.pages = await self.read_pages([s.href for s in bundle.sources])

        context = "\n\n".join([*bundle.snippets, *bundle.pages])
        bundle.context = context[: self._research.context_char_limit]
        logger.info(
            "Context gathered: {} chars from {} sources",
            len(bundle.context),
            len(bundle.sources),
        )
        return bundle

    async def read_pages(self, urls: list[str]) -> list[str]:
        """Read several pages on one shared browser; failed pages are dropped."""
        if not urls:
            return []
        async with browser_session(self.config.crawler) as browser:
            texts = await asyncio.gather(
                *(extract_page_text(browser, url, self.config.crawler) for url in urls)
            )
        return [text for text in texts if text]

    async def resolve_image(self, image_query: str, topic: str | None = None) -> str:
        """Image URL for a slide, or a placeholder when the lookup fails."""
        try:
            if (self._research.provider or "").lower() == "serper":
                image_url = await self._serper_image(image_query, topic)
            else:
                image_url = await scrape_images(image_query, topic, self.config.crawler)
        except Exception as e:
            logger.error("Image scrape failed for {!r}: {}", image_query, e)
            return self._research.image_error_url
        return image_url or self._research.placeholder_image_url

    async def topic_cards(self, section_id: str, query: str, category: str) -> list[dict[str, Any]]:
        """Build home-feed cards from one section query."""
        organic = await self.search(query)
        cards: list[dict[str, Any]] = []
        for index, result in enumerate(organic):
            title = clean_title(result.title)
            image = await self.resolve_image(f"{title} {category}", category)
            cards.append(
                {
                    "id": f"{section_id}-{index}",
                    "title": title,
                    "query": title,
                    "image": image,
                    "category": category,
                }
            )
        return cards

    async def _serper_image(self, image_query: str, topic: str | None) -> str:
        serper_cfg = self._research.serper
        api_key = self._serper_api_key()
        image_url = await search_serper_image(
            image_query, api_key=api_key, base_url=serper_cfg.images_url
        )
        if not image_url and topic and topic != image_query:
            image_url = await search_serper_image(
                topic, api_key=api_key, base_url=serper_cfg.images_url
            )
        return image_url

    def _serper_api_key(self) -> str:
        api_key = self._research.serper.api_key or os.environ.get(self._ENV_KEY, "")
        if not api_key:
            raise SearchBackendError(
                f"serper api key not configured (set research.serper.apiKey or {self._ENV_KEY})"
            )
        return api_key
