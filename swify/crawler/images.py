"""First-match photo lookup on the Unsplash search gallery."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from loguru import logger

from swify.crawler.browser import MAC_USER_AGENT, browser_session, new_page
from swify.crawler.filters import ASSET_RESOURCE_TYPES, install_request_filter
from swify.crawler.search import encode_query

if TYPE_CHECKING:
    from swify.config.schema import CrawlerConfig

PHOTO_SELECTOR = 'a[href^="/photos/"] img'

_CANDIDATES_SCRIPT = """
() => ({
  strict: Array.from(document.querySelectorAll('a[href^="/photos/"] img')).map((img) => img.src || ""),
  figures: Array.from(document.querySelectorAll("figure img")).map((img) => img.src || ""),
})
"""


def has_non_ascii(text: str) -> bool:
    return not text.isascii()


def build_gallery_url(base_url: str, query: str) -> str:
    return f"{base_url}{encode_query(query)}"


def pick_image_url(candidates: dict[str, list[str]] | None, cdn_host: str) -> str | None:
    """
    Pick the first CDN-hosted photo from in-page candidates.

    Strict photo-link images win; otherwise the first figure image that is
    not a profile avatar.
    """
    if not candidates:
        return None

    for src in candidates.get("strict") or []:
        if src and cdn_host in src:
            return src

    for src in candidates.get("figures") or []:
        if src and cdn_host in src and "profile" not in src:
            return src

    return None


def optimize_image_url(url: str, config: CrawlerConfig | None = None) -> str:
    """Pin quality, width and fit on CDN URLs; leave other URLs untouched."""
    from swify.config.schema import CrawlerConfig

    cfg = config or CrawlerConfig()
    if cfg.image_cdn_host not in url:
        return url

    overrides = {
        "q": str(cfg.image_quality),
        "w": str(cfg.image_width),
        "fit": cfg.image_fit,
    }
    parts = urlsplit(url)
    params: list[tuple[str, str]] = []
    seen: set[str] = set()
    for key, value in parse_qsl(parts.query, keep_blank_values=True):
        if key in overrides:
            if key in seen:
                continue
            seen.add(key)
            value = overrides[key]
        params.append((key, value))
    for key, value in overrides.items():
        if key not in seen:
            params.append((key, value))

    return urlunsplit(parts._replace(query=urlencode(params)))


async def _try_fetch(page: Any, query: str, cfg: CrawlerConfig) -> str | None:
    url = build_gallery_url(cfg.gallery_url, query)
    logger.info("Navigating to: {}", url)
    try:
        await page.goto(url, wait_until="domcontentloaded", timeout=cfg.image_nav_timeout_ms)
        # Results render after the first paint.
        await page.wait_for_selector(PHOTO_SELECTOR, timeout=cfg.image_wait_timeout_ms)
        candidates = await page.evaluate(_CANDIDATES_SCRIPT)
        return pick_image_url(candidates, cfg.image_cdn_host)
    except Exception as e:
        logger.warning("Image search failed for {!r}: {}", query, e)
        return None


async def scrape_images(
    query: str,
    fallback_query: str | None = None,
    config: CrawlerConfig | None = None,
) -> str | None:
    """
    Find one photo URL for ``query``, trying ``fallback_query`` once if needed.

    The fallback is only used when it differs from ``query`` and is plain
    ASCII. Returns ``None`` when nothing qualifies; a browser that cannot be
    launched raises.
    """
    from swify.config.schema import CrawlerConfig

    cfg = config or CrawlerConfig()

    async with browser_session(cfg) as browser:
        try:
            page = await new_page(browser, MAC_USER_AGENT)
            await install_request_filter(page, ASSET_RESOURCE_TYPES)

            image_url = await _try_fetch(page, query, cfg)

            if not image_url and fallback_query and fallback_query != query:
                if has_non_ascii(fallback_query):
                    logger.warning(
                        "Skipping fallback query with non-English characters: {!r}",
                        fallback_query,
                    )
                else:
                    logger.info("Specific query failed. Trying fallback: {!r}", fallback_query)
                    image_url = await _try_fetch(page, fallback_query, cfg)
        except Exception as e:
            logger.error("Image lookup failed for {!r}: {}", query, e)
            return None

    if not image_url:
        logger.warning("No image found for {!r} (fallback: {!r})", query, fallback_query)
        return None

    image_url = optimize_image_url(image_url, cfg)
    logger.info("Found image: {}...", image_url[:50])
    return image_url
