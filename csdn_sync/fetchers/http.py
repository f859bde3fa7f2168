from __future__ import annotations

import re
from typing import Callable, Dict, List, Optional

import requests
from bs4 import BeautifulSoup, Tag

from ..errors import ContentNotFoundError, NetworkError
from ..models import ArticleDetail
from ..processors.markdown import html_to_markdown
from ..processors.normalize import estimate_read_minutes
from ..utils.logging import get_logger
from ..utils.sync_config import SyncConfig

logger = get_logger("csdn_sync.fetchers.http")

_ARTICLE_HEADERS: Dict[str, str] = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "zh-CN,zh;q=0.9",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
}

# Most specific first
CONTENT_SELECTORS = ("#article_content", ".article-content", ".blog-content-box", "article")

BOILERPLATE_SELECTORS = (
    ".hide-article-box",
    ".article-bar-bottom",
    ".recommend-box",
    ".template-box",
    "script",
    "style",
)

COUNTER_SELECTORS = {
    "views": ".read-count",
    "likes": ".likenum",
    "comments": ".comment-count",
}

_number_re = re.compile(r"\d[\d,]*")

ContentStrategy = Callable[[BeautifulSoup], Optional[Tag]]


def _select(selector: str) -> ContentStrategy:
    def strategy(soup: BeautifulSoup) -> Optional[Tag]:
        return soup.select_one(selector)

    strategy.__name__ = f"select({selector})"
    return strategy


CONTENT_STRATEGIES: List[ContentStrategy] = [_select(s) for s in CONTENT_SELECTORS]


def find_content(soup: BeautifulSoup, url: str) -> Tag:
    """Return the first container matched by the ordered content strategies."""
    for strategy in CONTENT_STRATEGIES:
        node = strategy(soup)
        if node is not None:
            logger.debug("Content located via %s on %s", strategy.__name__, url)
            return node
    raise ContentNotFoundError(url)


def strip_boilerplate(container: Tag) -> None:
    for selector in BOILERPLATE_SELECTORS:
        for node in container.select(selector):
            node.decompose()


def extract_number(text: str | None) -> int:
    """First integer in ``text`` (thousands separators allowed), or 0."""
    if not text:
        return 0
    match = _number_re.search(text)
    if not match:
        return 0
    try:
        return int(match.group(0).replace(",", ""))
    except ValueError:
        return 0


def extract_counters(soup: BeautifulSoup) -> Dict[str, int]:
    counters: Dict[str, int] = {}
    for name, selector in COUNTER_SELECTORS.items():
        node = soup.select_one(selector)
        counters[name] = extract_number(node.get_text(" ", strip=True) if node else None)
    return counters


def fetch_article_html(url: str, config: SyncConfig) -> str:
    headers = {"User-Agent": config.user_agent, **_ARTICLE_HEADERS}
    try:
        resp = requests.get(url, headers=headers, timeout=config.article_timeout)
    except requests.RequestException as exc:
        raise NetworkError(f"Failed to fetch article {url}: {exc}", url=url) from exc
    if resp.status_code >= 400:
        raise NetworkError(
            f"Article request to {url} returned HTTP {resp.status_code}",
            url=url,
            status=resp.status_code,
        )
    return resp.text


def scrape_article(url: str, config: SyncConfig) -> ArticleDetail:
    """Fetch an article page and convert its main content to Markdown.

    Raises ``NetworkError`` or ``ContentNotFoundError``; counter extraction
    never raises.
    """
    logger.debug("Fetching article from %s", url)
    soup = BeautifulSoup(fetch_article_html(url, config), "html.parser")

    container = find_content(soup, url)
    counters = extract_counters(soup)
    strip_boilerplate(container)
    markdown = html_to_markdown(container.decode_contents())

    return ArticleDetail(
        markdown_body=markdown,
        estimated_read_minutes=estimate_read_minutes(markdown),
        views=counters["views"],
        likes=counters["likes"],
        comments=counters["comments"],
    )
