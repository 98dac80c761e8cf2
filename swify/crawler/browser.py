"""Headless browser session factory built on Playwright."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from loguru import logger
from playwright.async_api import async_playwright

if TYPE_CHECKING:
    from swify.config.schema import CrawlerConfig

DESKTOP_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
MAC_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/15.0 Safari/605.1.15"
)


@asynccontextmanager
async def browser_session(config: CrawlerConfig | None = None) -> AsyncIterator[Any]:
    """
    Launch one isolated headless browser and close it on every exit path.

    Launch failures propagate to the caller; there is no retry.
    """
    from swify.config.schema import CrawlerConfig

    cfg = config or CrawlerConfig()

    async with async_playwright() as playwright:
        browser_type = getattr(playwright, cfg.browser)
        browser = await browser_type.launch(
            headless=cfg.headless,
            args=list(cfg.launch_args),
        )
        logger.debug("Launched {} (headless={})", cfg.browser, cfg.headless)
        try:
            yield browser
        finally:
            await browser.close()


async def new_page(browser: Any, user_agent: str) -> Any:
    """Open a page that identifies itself with ``user_agent``."""
    return await browser.new_page(user_agent=user_agent)
