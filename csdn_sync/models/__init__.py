"""Typed models used across the application."""

from .feed_item import FeedItem
from .article_detail import ArticleDetail
from .post import Post

__all__ = ["FeedItem", "ArticleDetail", "Post"]
