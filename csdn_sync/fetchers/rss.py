from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Optional

import feedparser
import requests

from ..errors import FormatError, NetworkError
from ..models import FeedItem
from ..utils.logging import get_logger
from ..utils.sync_config import SyncConfig

logger = get_logger("csdn_sync.fetchers.rss")


def fetch_feed(config: SyncConfig) -> bytes:
    """Download the raw feed document for the configured account.

    No explicit timeout is set; the feed request relies on the transport
    default. Any failure is fatal for the run.
    """
    url = config.feed_url
    logger.debug("Fetching RSS from %s", url)
    try:
        resp = requests.get(url, headers={"User-Agent": config.user_agent})
    except requests.RequestException as exc:
        logger.warning("RSS request error for %s: %s", url, exc)
        raise NetworkError(f"Failed to fetch feed {url}: {exc}", url=url) from exc

    if resp.status_code >= 400:
        logger.warning("RSS fetch failed (%s): %s", resp.status_code, url)
        raise NetworkError(
            f"Feed request to {url} returned HTTP {resp.status_code}",
            url=url,
            status=resp.status_code,
        )
    return resp.content


def _parse_datetime(entry: Any) -> Optional[datetime]:
    # feedparser normalizes dates to a UTC struct_time
    for key in ("published_parsed", "updated_parsed"):
        tm = entry.get(key)
        if tm:
            try:
                return datetime(*tm[:6], tzinfo=timezone.utc)
            except (TypeError, ValueError):
                return None
    return None


def _categories(entry: Any) -> List[str]:
    terms = []
    for tag in entry.get("tags") or []:
        term = (tag.get("term") or "").strip()
        if term:
            terms.append(term)
    return terms


def _decode_entry(entry: Any, position: int) -> FeedItem:
    title = (entry.get("title") or "").strip()
    link = (entry.get("link") or "").strip()
    if not title or not link:
        raise FormatError(f"Feed item #{position} is missing a title or link")
    return FeedItem(
        title=title,
        link=link,
        published=_parse_datetime(entry),
        description=entry.get("summary") or "",
        categories=_categories(entry),
    )


def parse_feed(raw: bytes | str, *, max_items: int) -> List[FeedItem]:
    """Decode a syndication document into at most ``max_items`` feed items.

    Raises ``FormatError`` when the document is not a recognizable feed or
    carries no items at all.
    """
    parsed = feedparser.parse(raw)
    if getattr(parsed, "bozo", False):
        # feedparser sets bozo on recoverable errors and may still yield entries
        logger.debug("Feed 'bozo' flagged: %s", getattr(parsed, "bozo_exception", None))

    entries = getattr(parsed, "entries", None) or []
    if not getattr(parsed, "version", "") or not entries:
        raise FormatError("RSS document has no channel items")

    items = [_decode_entry(entry, idx + 1) for idx, entry in enumerate(entries[:max_items])]
    logger.info("Parsed %d of %d RSS entries", len(items), len(entries))
    return items
