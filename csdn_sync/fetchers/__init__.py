"""Content fetching layer: the RSS feed and individual article pages."""

from .rss import fetch_feed, parse_feed
from .http import scrape_article

__all__ = ["fetch_feed", "parse_feed", "scrape_article"]
