"""Readable paragraph extraction from arbitrary pages."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from loguru import logger

from swify.crawler.browser import DESKTOP_USER_AGENT, new_page
from swify.crawler.filters import TEXT_ONLY_RESOURCE_TYPES, install_request_filter

if TYPE_CHECKING:
    from swify.config.schema import CrawlerConfig

_PARAGRAPHS_SCRIPT = """
() => Array.from(document.querySelectorAll("p")).map((p) => p.innerText || "")
"""


def select_paragraphs(
    paragraphs: list[str] | None,
    *,
    min_chars: int = 50,
    limit: int = 15,
) -> list[str]:
    """Keep long paragraphs only; short ones are usually banners and boilerplate."""
    kept: list[str] = []
    for text in paragraphs or []:
        stripped = (text or "").strip()
        if len(stripped) <= min_chars:
            continue
        kept.append(stripped)
        if len(kept) >= limit:
            break
    return kept


async def extract_page_text(browser: Any, url: str, config: CrawlerConfig | None = None) -> str:
    """
    Return ``SOURCE: <url>`` followed by the page's long paragraphs.

    ``browser`` belongs to the caller; only the page opened here is closed.
    Any failure returns an empty string.
    """
    from swify.config.schema import CrawlerConfig

    cfg = config or CrawlerConfig()
    page = None
    try:
        page = await new_page(browser, DESKTOP_USER_AGENT)
        await install_request_filter(page, TEXT_ONLY_RESOURCE_TYPES)

        logger.info("Visiting: {}", url)
        await page.goto(url, wait_until="domcontentloaded", timeout=cfg.page_text_timeout_ms)
        raw = await page.evaluate(_PARAGRAPHS_SCRIPT)
        paragraphs = select_paragraphs(
            raw,
            min_chars=cfg.min_paragraph_chars,
            limit=cfg.max_paragraphs,
        )
        return f"SOURCE: {url}\n" + "\n\n".join(paragraphs)
    except Exception as e:
        logger.warning("Failed to visit {}: {}", url, e)
        return ""
    finally:
        if page is not None:
            await page.close()
