from __future__ import annotations

import time
from datetime import date, datetime, timezone
from typing import Callable, List, Optional

from .fetchers import fetch_feed, parse_feed, scrape_article
from .models import ArticleDetail, FeedItem, Post
from .output import MarkdownWriter, SyncReport, load_index, merge_posts, save_index
from .processors import build_post, fallback_detail
from .processors.normalize import extract_post_id
from .utils.logging import get_logger
from .utils.sync_config import SyncConfig

logger = get_logger("csdn_sync.orchestrator")


class SyncOrchestrator:
    """Runs one sync: feed -> articles -> Markdown files -> merged JSON index.

    Items are processed strictly one at a time in feed order, with
    ``config.request_delay`` seconds between successive article fetches.
    Feed-stage errors propagate and nothing is written; article-stage errors
    degrade only the affected item.
    """

    def __init__(
        self,
        config: SyncConfig,
        *,
        dry_run: bool = False,
        sleep: Callable[[float], None] = time.sleep,
        today: Optional[date] = None,
    ) -> None:
        self.config = config
        self.dry_run = dry_run
        self.sleep = sleep
        self.today = today
        self.writer = MarkdownWriter(config.markdown_dir, content_root=config.content_root)

    def fetch_items(self) -> List[FeedItem]:
        logger.info("Fetching RSS feed for %s", self.config.username)
        raw = fetch_feed(self.config)
        items = parse_feed(raw, max_items=self.config.max_posts)
        logger.info("Found %d article(s)", len(items))
        return items

    def _ensure_dirs(self) -> None:
        for directory in (
            self.config.output_json_path.parent,
            self.config.markdown_dir,
            self.config.image_dir,
        ):
            directory.mkdir(parents=True, exist_ok=True)

    def _scrape(self, item: FeedItem, report: SyncReport) -> ArticleDetail:
        try:
            detail = scrape_article(item.link, self.config)
        except Exception as exc:  # noqa: BLE001 - one bad page must not abort the run
            logger.warning("Could not fetch details for %s: %s; using feed description", item.link, exc)
            report.fallbacks += 1
            return fallback_detail(item.description)
        report.articles_scraped += 1
        return detail

    def process_item(self, item: FeedItem, post_id: int, report: SyncReport) -> Post:
        detail = self._scrape(item, report)
        post = build_post(item, detail, post_id=post_id, config=self.config, today=self.today)

        if self.dry_run:
            path = self.writer.path_for(post.date, post.slug)
            logger.info("[DRY-RUN] Would write %s", path)
            post.content_file = self.writer.relative_path(path)
        else:
            post.content_file = self.writer.write(
                post_id=post.id,
                title=post.title,
                date=post.date,
                slug=post.slug,
                original_url=post.original_url,
                body=detail.markdown_body,
            )
        return post

    def run(self) -> SyncReport:
        started = time.perf_counter()
        report = SyncReport(dry_run=self.dry_run)
        if self.today is None:
            self.today = datetime.now(timezone.utc).date()

        items = self.fetch_items()
        existing = load_index(self.config.output_json_path)
        if not self.dry_run:
            self._ensure_dirs()

        posts: List[Post] = []
        for idx, item in enumerate(items):
            if idx and self.config.request_delay:
                self.sleep(self.config.request_delay)
            logger.info(
                "Processing article %d/%d: %s (id=%s)",
                idx + 1,
                len(items),
                item.title,
                extract_post_id(item.link) or "-",
            )
            posts.append(self.process_item(item, idx + 1, report))
            report.items_processed += 1

        merged = merge_posts(existing, posts)
        report.inserted = merged.inserted
        report.updated = merged.updated
        report.total_posts = len(merged.posts)

        if self.dry_run:
            logger.info("[DRY-RUN] Would write %d posts to %s", len(merged.posts), self.config.output_json_path)
        else:
            save_index(self.config.output_json_path, merged.posts)

        logger.info(
            "Sync finished: posts=%d, inserted=%d, updated=%d, fallbacks=%d, elapsed_s=%.1f",
            report.total_posts,
            report.inserted,
            report.updated,
            report.fallbacks,
            time.perf_counter() - started,
        )
        return report
