from __future__ import annotations

from dataclasses import dataclass

READ_TIME_TEMPLATE = "{minutes}分钟"


def format_read_time(minutes: int) -> str:
    return READ_TIME_TEMPLATE.format(minutes=minutes)


@dataclass(slots=True)
class ArticleDetail:
    markdown_body: str
    estimated_read_minutes: int = 1
    views: int = 0
    likes: int = 0
    comments: int = 0
    # Set when the detail was derived from the feed description instead of the page
    read_time_override: str | None = None

    @property
    def read_time(self) -> str:
        if self.read_time_override:
            return self.read_time_override
        return format_read_time(self.estimated_read_minutes)
