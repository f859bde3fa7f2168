"""Processing steps: HTML-to-Markdown conversion and post normalization."""

from .markdown import html_to_markdown
from .normalize import (
    build_post,
    determine_category,
    estimate_read_minutes,
    fallback_detail,
    slugify,
    truncate_description,
)

__all__ = [
    "html_to_markdown",
    "build_post",
    "determine_category",
    "estimate_read_minutes",
    "fallback_detail",
    "slugify",
    "truncate_description",
]
