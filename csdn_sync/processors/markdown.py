from __future__ import annotations

import re

from bs4 import Tag
from markdownify import ATX, MarkdownConverter

_tag_re = re.compile(r"<[a-zA-Z!/][^>]*>")
_blank_lines_re = re.compile(r"\n{3,}")

LANGUAGE_PREFIXES = ("language-", "lang-")


def code_language(pre: Tag) -> str:
    """Language hint from the ``language-*`` class of the block's ``<code>``."""
    code = pre.find("code")
    if code is None:
        return ""
    for cls in code.get("class") or []:
        for prefix in LANGUAGE_PREFIXES:
            if cls.startswith(prefix):
                return cls[len(prefix):]
    return ""


class ArticleConverter(MarkdownConverter):
    """markdownify converter with fenced code blocks that keep the language hint."""

    def __init__(self, **options) -> None:
        options.setdefault("heading_style", ATX)
        options.setdefault("escape_asterisks", False)
        options.setdefault("escape_underscores", False)
        super().__init__(**options)

    def convert_pre(self, el, text, *args, **kwargs):
        # markdownify passes either ``convert_as_inline`` or ``parent_tags`` here
        code = el.get_text().strip()
        if not code:
            return ""
        return f"\n\n```{code_language(el)}\n{code}\n```\n\n"


def html_to_markdown(html: str | None) -> str:
    """Convert an article HTML fragment to Markdown.

    Text without any HTML tags is returned as-is, so converting Markdown
    again leaves it unchanged.
    """
    if not html:
        return ""
    if not _tag_re.search(html):
        return html
    markdown = ArticleConverter().convert(html)
    return _blank_lines_re.sub("\n\n", markdown).strip()
