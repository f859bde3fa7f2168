from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass(slots=True)
class FeedItem:
    """One entry of the syndication feed, in feed order."""

    title: str
    link: str
    published: Optional[datetime] = None
    description: str = ""
    categories: List[str] = field(default_factory=list)
