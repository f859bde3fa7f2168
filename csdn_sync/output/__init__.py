"""Persistence: Markdown post files and the JSON post index."""

from .markdown_writer import MarkdownWriter
from .index_store import MergeResult, load_index, merge_posts, save_index
from .sync_reporter import SyncReport

__all__ = ["MarkdownWriter", "MergeResult", "load_index", "merge_posts", "save_index", "SyncReport"]
