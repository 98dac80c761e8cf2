"""Configuration schema using Pydantic."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Base(BaseModel):
    """Base model that accepts both camelCase and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CrawlerConfig(Base):
    """Headless-browser scraping configuration."""

    browser: Literal["chromium", "firefox", "webkit"] = "chromium"
    headless: bool = True
    launch_args: list[str] = Field(
        default_factory=lambda: ["--no-sandbox", "--disable-setuid-sandbox"]
    )

    search_url: str = "https://html.duckduckgo.com/html/"
    search_timeout_ms: int = 10000
    max_search_results: int = 3

    gallery_url: str = "https://unsplash.com/s/photos/"
    image_nav_timeout_ms: int = 10000
    image_wait_timeout_ms: int = 8000
    image_cdn_host: str = "images.unsplash.com"
    image_quality: int = 80
    image_width: int = 1080
    image_fit: str = "max"

    page_text_timeout_ms: int = 8000
    min_paragraph_chars: int = 50
    max_paragraphs: int = 15


class SerperConfig(Base):
    """Serper API search backend."""

    api_key: str = ""
    base_url: str = "https://google.serper.dev/search"
    images_url: str = "https://google.serper.dev/images"
    count: int = 4


class ResearchConfig(Base):
    """Aggregation over several search queries."""

    provider: Literal["browser", "serper"] = "browser"
    max_queries: int = 4
    context_char_limit: int = 15000
    deep_read: bool = False
    placeholder_image_url: str = "https://placehold.co/600x400?text=Image+Not+Found"
    image_error_url: str = "https://placehold.co/600x400?text=Image+Error"
    serper: SerperConfig = Field(default_factory=SerperConfig)


class Config(Base):
    """Root configuration for swify."""

    crawler: CrawlerConfig = Field(default_factory=CrawlerConfig)
    research: ResearchConfig = Field(default_factory=ResearchConfig)
