"""Headless-browser scraping: web search, photo lookup, page text."""

from swify.crawler.browser import browser_session
from swify.crawler.images import scrape_images
from swify.crawler.models import SearchResponse, SearchResult
from swify.crawler.page_text import extract_page_text
from swify.crawler.search import scrape_web

__all__ = [
    "SearchResponse",
    "SearchResult",
    "browser_session",
    "extract_page_text",
    "scrape_images",
    "scrape_web",
]
