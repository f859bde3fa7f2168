from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class SyncReport:
    items_processed: int = 0
    articles_scraped: int = 0
    fallbacks: int = 0
    inserted: int = 0
    updated: int = 0
    total_posts: int = 0
    dry_run: bool = False

    def to_markdown(self) -> str:
        heading = "### Sync Summary (dry run)" if self.dry_run else "### Sync Summary"
        return (
            f"{heading}\n\n"
            f"- Items processed: {self.items_processed}\n"
            f"- Articles scraped: {self.articles_scraped}\n"
            f"- Fallbacks used: {self.fallbacks}\n"
            f"- Posts inserted: {self.inserted}\n"
            f"- Posts updated: {self.updated}\n"
            f"- Posts in index: {self.total_posts}\n"
        )
