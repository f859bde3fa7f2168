"""Top-level package for the CSDN blog sync.

Fetches a CSDN account's RSS feed, scrapes each article into Markdown and
keeps a JSON post index for the site's blog panel.
"""

__all__ = []
