from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_FEED_URL_TEMPLATE = "https://blog.csdn.net/{username}/rss/list"
DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


@dataclass(slots=True)
class SyncConfig:
    """Settings for one sync run, built once at startup and passed explicitly."""

    username: str
    max_posts: int = 10
    output_json_path: Path = Path("data/blog.json")
    markdown_dir: Path = Path("content/posts")
    image_dir: Path = Path("assets/images/posts")
    author: str = ""
    default_cover_image: str = ""
    content_root: Path = Path(".")
    feed_url_template: str = DEFAULT_FEED_URL_TEMPLATE
    source_tag: str = "csdn"
    default_tag: str = "技术"
    request_delay: float = 1.0
    article_timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT

    @property
    def feed_url(self) -> str:
        return self.feed_url_template.format(username=self.username)
