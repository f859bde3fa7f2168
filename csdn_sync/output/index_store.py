from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List

from ..errors import FormatError
from ..models import Post
from ..utils.logging import get_logger

logger = get_logger("csdn_sync.output.index")

DEDUP_KEY = "originalUrl"

PostRecord = Dict[str, Any]


@dataclass(slots=True)
class MergeResult:
    posts: List[PostRecord]
    inserted: int = 0
    updated: int = 0


def load_index(path: Path | str) -> List[PostRecord]:
    """Read the persisted post index; a missing file is an empty index.

    A file that is not a JSON array of objects raises ``FormatError`` rather
    than being replaced, so a corrupt index is never silently discarded.
    """
    index_path = Path(path)
    if not index_path.exists():
        return []
    try:
        data = json.loads(index_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise FormatError(f"Index file {index_path} is not valid JSON: {exc}") from exc
    if not isinstance(data, list) or not all(isinstance(row, dict) for row in data):
        raise FormatError(f"Index file {index_path} must contain a JSON array of posts")
    return data


def sort_by_date(posts: Iterable[PostRecord]) -> List[PostRecord]:
    # ISO dates sort correctly as strings; ties keep their relative order
    return sorted(posts, key=lambda p: str(p.get("date") or ""), reverse=True)


def merge_posts(existing: Iterable[PostRecord], new_posts: Iterable[Post | PostRecord]) -> MergeResult:
    """Merge this run's posts into the existing index keyed by ``originalUrl``.

    Known URLs are updated field by field; unseen URLs are appended. Records
    without an ``originalUrl`` are carried over untouched.
    """
    by_url: Dict[str, PostRecord] = {}
    unkeyed: List[PostRecord] = []
    for row in existing:
        url = row.get(DEDUP_KEY)
        if url:
            by_url[url] = dict(row)
        else:
            unkeyed.append(dict(row))
    if unkeyed:
        logger.warning("Keeping %d index record(s) without %s", len(unkeyed), DEDUP_KEY)

    result = MergeResult(posts=[])
    for post in new_posts:
        record = post.to_dict() if isinstance(post, Post) else dict(post)
        url = record[DEDUP_KEY]
        if url in by_url:
            by_url[url].update(record)
            result.updated += 1
        else:
            by_url[url] = record
            result.inserted += 1

    result.posts = sort_by_date([*by_url.values(), *unkeyed])
    return result


def save_index(path: Path | str, posts: List[PostRecord]) -> None:
    """Replace the index file wholesale with ``posts``."""
    index_path = Path(path)
    index_path.parent.mkdir(parents=True, exist_ok=True)
    tmp = index_path.with_suffix(index_path.suffix + ".tmp")
    tmp.write_text(json.dumps(posts, ensure_ascii=False, indent=2), encoding="utf-8")
    tmp.replace(index_path)
    logger.debug("Persisted %d posts to %s", len(posts), index_path)
