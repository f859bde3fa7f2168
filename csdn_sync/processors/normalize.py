from __future__ import annotations

import hashlib
import math
import re
from datetime import date, datetime, timezone
from typing import Iterable, List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup

from ..models import ArticleDetail, FeedItem, Post
from ..utils.logging import get_logger
from ..utils.sync_config import SyncConfig

_logger = get_logger("csdn_sync.processors.normalize")

SLUG_MAX_LENGTH = 50
EXCERPT_LENGTH = 150
FALLBACK_CONTENT_LENGTH = 200
CONTENT_PREVIEW_LENGTH = 500
MAX_TAGS = 5
CHARS_PER_MINUTE = 300
FALLBACK_READ_TIME = "5分钟"
ELLIPSIS = "..."

_slug_strip_re = re.compile(r"[^\u4e00-\u9fa5a-z0-9\s-]")
_whitespace_re = re.compile(r"\s+")
_hyphens_re = re.compile(r"-{2,}")
_cover_re = re.compile(r'<img[^>]+src="([^">]+)"', re.IGNORECASE)
_post_id_re = re.compile(r"article/details/(\d+)")

# Checked in order; the first bucket whose title keywords or tags match wins.
CATEGORY_RULES: Tuple[Tuple[str, Tuple[str, ...], Tuple[str, ...]], ...] = (
    ("前端", ("前端",), ("前端", "html", "css", "javascript")),
    ("后端", ("后端",), ("后端", "java", "python", "node")),
    ("算法", ("算法",), ("算法", "数据结构")),
    ("随笔", (), ("随笔", "生活", "思考")),
)
DEFAULT_CATEGORY = "技术文章"


def slugify(title: str) -> str:
    """URL-safe slug: lowercase, CJK/ASCII alphanumerics joined by single hyphens."""
    slug = _slug_strip_re.sub("", (title or "").lower())
    slug = _whitespace_re.sub("-", slug)
    slug = _hyphens_re.sub("-", slug)
    return slug[:SLUG_MAX_LENGTH]


def extract_post_id(link: str) -> Optional[str]:
    match = _post_id_re.search(link or "")
    return match.group(1) if match else None


def format_post_date(published: Optional[datetime], today: Optional[date] = None) -> str:
    if published is not None:
        return published.date().isoformat()
    return (today or datetime.now(timezone.utc).date()).isoformat()


def extract_cover_image(description: str | None) -> Optional[str]:
    match = _cover_re.search(description or "")
    return match.group(1) if match else None


def extract_tags(categories: Sequence[str], default_tag: str) -> List[str]:
    tags = [c for c in categories if c][:MAX_TAGS]
    return tags or [default_tag]


def determine_category(title: str, tags: Iterable[str]) -> str:
    lower_title = (title or "").lower()
    lower_tags = {t.lower() for t in tags}
    for category, title_keywords, tag_keywords in CATEGORY_RULES:
        if any(k in lower_title for k in title_keywords):
            return category
        if any(k in lower_tags for k in tag_keywords):
            return category
    return DEFAULT_CATEGORY


def strip_html(text: str | None) -> str:
    if not text:
        return ""
    return BeautifulSoup(text, "html.parser").get_text()


def truncate(text: str, max_length: int) -> str:
    return text[:max_length] + ELLIPSIS if len(text) > max_length else text


def truncate_description(text: str | None, max_length: int) -> str:
    """Plain-text version of ``text`` cut to ``max_length`` characters plus an ellipsis."""
    return truncate(strip_html(text), max_length)


def estimate_read_minutes(markdown: str | None) -> int:
    chars = len(_whitespace_re.sub("", markdown or ""))
    return max(1, math.ceil(chars / CHARS_PER_MINUTE))


def fallback_detail(description: str | None) -> ArticleDetail:
    """Detail used when the article page could not be scraped."""
    return ArticleDetail(
        markdown_body=truncate_description(description, FALLBACK_CONTENT_LENGTH),
        read_time_override=FALLBACK_READ_TIME,
    )


def post_slug(item: FeedItem) -> str:
    """Slug for ``item``; titles made only of punctuation fall back to the article id."""
    slug = slugify(item.title)
    if slug.strip("-"):
        return slug
    post_id = extract_post_id(item.link) or hashlib.sha1(item.link.encode("utf-8")).hexdigest()[:8]
    fallback = f"post-{post_id}"
    _logger.debug("Title %r has no slug characters; using %s", item.title, fallback)
    return fallback


def build_post(
    item: FeedItem,
    detail: ArticleDetail,
    *,
    post_id: int,
    config: SyncConfig,
    content_file: str = "",
    today: Optional[date] = None,
) -> Post:
    tags = extract_tags(item.categories, config.default_tag)
    return Post(
        id=post_id,
        title=item.title,
        slug=post_slug(item),
        date=format_post_date(item.published, today),
        tags=tags,
        category=determine_category(item.title, tags),
        author=config.author,
        excerpt=truncate_description(item.description, EXCERPT_LENGTH),
        cover_image=extract_cover_image(item.description) or config.default_cover_image,
        read_time=detail.read_time,
        views=detail.views,
        likes=detail.likes,
        comments=detail.comments,
        content=detail.markdown_body[:CONTENT_PREVIEW_LENGTH] + ELLIPSIS,
        content_file=content_file,
        source=config.source_tag,
        original_url=item.link,
    )
