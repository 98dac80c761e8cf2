"""Shared crawler models."""

from dataclasses import dataclass
from typing import TypedDict


@dataclass(slots=True)
class SearchResult:
    """One organic search hit as rendered by the search engine."""

    title: str
    href: str
    snippet: str = ""


class SearchResponse(TypedDict):
    organic: list[SearchResult]
