from __future__ import annotations

import json
import os
from pathlib import Path

from ..utils.logging import get_logger

logger = get_logger("csdn_sync.output.markdown")


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def render_front_matter(*, post_id: int, title: str, date: str, slug: str, original_url: str) -> str:
    return (
        "---\n"
        f"title: {_quote(title)}\n"
        f"date: {_quote(date)}\n"
        f"slug: {_quote(slug)}\n"
        f"id: {post_id}\n"
        f"originalUrl: {_quote(original_url)}\n"
        "---\n"
    )


class MarkdownWriter:
    """Writes one ``<date>-<slug>.md`` file per post under ``markdown_dir``.

    Returned paths are POSIX paths relative to ``content_root`` so they can be
    stored in the index and resolved by the site.
    """

    def __init__(self, markdown_dir: Path | str, *, content_root: Path | str = ".") -> None:
        self.markdown_dir = Path(markdown_dir)
        self.content_root = Path(content_root)

    def path_for(self, date: str, slug: str) -> Path:
        return self.markdown_dir / f"{date}-{slug}.md"

    def relative_path(self, path: Path) -> str:
        return Path(os.path.relpath(path.resolve(), self.content_root.resolve())).as_posix()

    def write(
        self,
        *,
        post_id: int,
        title: str,
        date: str,
        slug: str,
        original_url: str,
        body: str,
    ) -> str:
        path = self.path_for(date, slug)
        path.parent.mkdir(parents=True, exist_ok=True)
        front_matter = render_front_matter(
            post_id=post_id, title=title, date=date, slug=slug, original_url=original_url
        )
        path.write_text(f"{front_matter}\n{body}", encoding="utf-8")
        logger.debug("Wrote %s", path)
        return self.relative_path(path)
