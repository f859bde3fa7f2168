from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

# JSON key for each dataclass field, in persisted order
_JSON_KEYS = (
    ("id", "id"),
    ("title", "title"),
    ("slug", "slug"),
    ("date", "date"),
    ("tags", "tags"),
    ("category", "category"),
    ("author", "author"),
    ("excerpt", "excerpt"),
    ("cover_image", "coverImage"),
    ("read_time", "readTime"),
    ("views", "views"),
    ("likes", "likes"),
    ("comments", "comments"),
    ("content", "content"),
    ("content_file", "contentFile"),
    ("source", "source"),
    ("original_url", "originalUrl"),
)


@dataclass(slots=True)
class Post:
    """A persisted blog post record; ``original_url`` is the dedup key."""

    id: int
    title: str
    slug: str
    date: str
    original_url: str
    tags: List[str] = field(default_factory=list)
    category: str = ""
    author: str = ""
    excerpt: str = ""
    cover_image: str = ""
    read_time: str = ""
    views: int = 0
    likes: int = 0
    comments: int = 0
    content: str = ""
    content_file: str = ""
    source: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for attr, key in _JSON_KEYS:
            value = getattr(self, attr)
            data[key] = list(value) if isinstance(value, list) else value
        return data

