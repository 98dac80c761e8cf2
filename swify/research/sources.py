"""Helpers for turning raw search hits into display-ready sources."""

from urllib.parse import parse_qs, urlsplit


def normalize_source_href(href: str | None) -> str:
    """Unwrap DuckDuckGo's ``/l/?uddg=`` redirector to the destination URL."""
    if not href:
        return ""

    try:
        parts = urlsplit(href)
    except ValueError:
        return href

    host = parts.hostname or ""
    if "duckduckgo.com" in host and parts.path.startswith("/l/"):
        destination = parse_qs(parts.query).get("uddg")
        if destination:
            return destination[0]
    return href


def clean_title(title: str) -> str:
    """Strip the site-name suffix search engines append to page titles."""
    return title.split(" - ")[0].split(" | ")[0].strip()
