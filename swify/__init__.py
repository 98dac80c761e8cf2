"""Swify: topic research and image lookup via headless-browser scraping."""

__version__ = "0.1.0"
